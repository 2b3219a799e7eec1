# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for the key-value store that shares auth tokens across contexts."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class TokenStoreProtocol(Protocol):
    """
    Minimal read interface the credential resolver needs.

    Any persistent key-value store works; the bundled memory and Redis
    stores implement it, and so does anything with a compatible
    ``get_item`` coroutine.
    """

    async def get_item(self, key: str) -> str | None:
        """Return the value stored under key, or None if absent."""
        ...
