# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""One-shot readiness signal for the locally running server."""

import asyncio
import logging

logger = logging.getLogger(__name__)


class ReadinessGate:
    """
    Separates "the server process has been launched" from "a client wants to
    talk to it".

    An external driver (a parent process, an orchestrator) calls
    ``signal_ready()`` once the server is up; anything that must not probe the
    server earlier awaits ``wait_ready()``. The gate never resets.

    - Only the first ``signal_ready()`` call has an effect.
    - One signal releases every waiter, including ones that start waiting
      after the signal.
    - There is no timeout; callers that need one wrap ``wait_ready()`` in
      ``asyncio.wait_for``.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def is_ready(self) -> bool:
        return self._event.is_set()

    def signal_ready(self) -> None:
        if self._event.is_set():
            return

        self._event.set()
        logger.debug("Server readiness signalled")

    async def wait_ready(self) -> None:
        await self._event.wait()


__all__ = ["ReadinessGate"]
