# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol negotiation against the locally running server.

The server may still be starting up when the client first wants to talk to
it, and older servers only speak GraphQL. The negotiator absorbs both: it
waits for the readiness signal, probes the REST API and then the GraphQL API
for a version until one answers, and picks a protocol from that version.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

from packaging.specifiers import InvalidSpecifier

from ..observability.metrics import NegotiationMetrics
from ..protocols.client import ApiClientProtocol
from ..readiness import ReadinessGate
from ..types.server import ApiProtocol
from .versions import SERVER_REST_API_SUPPORTED, parse_version_range, version_satisfies

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str | None], ApiClientProtocol]
ProbeFailureCallback = Callable[[ApiProtocol, BaseException | None], None]
SleepFunc = Callable[[float], Awaitable[None]]

DEFAULT_PROBE_RETRY_DELAY = 0.1


class VersionNegotiator:
    """
    Decides which protocol client to use.

    The retry loop has no upper bound: if the server never becomes
    reachable, ``negotiate()`` never returns. Callers that need bounded
    waiting wrap it in ``asyncio.wait_for``.

    Within one round the REST probe always runs before the GraphQL probe;
    the two are never raced.
    """

    def __init__(
        self,
        rest_client_factory: ClientFactory,
        graphql_client_factory: ClientFactory,
        rest_api_supported: str = SERVER_REST_API_SUPPORTED,
        retry_delay: float = DEFAULT_PROBE_RETRY_DELAY,
        sleep: SleepFunc = asyncio.sleep,
        on_probe_failure: ProbeFailureCallback | None = None,
        metrics: NegotiationMetrics | None = None,
    ) -> None:
        """
        Initialize the negotiator.

        Args:
            rest_client_factory: Builds a REST client from an auth token
            graphql_client_factory: Builds a GraphQL client from an auth token
            rest_api_supported: Version range of servers that support REST
            retry_delay: Seconds to wait after a round where both probes failed
            sleep: Coroutine used to wait between rounds
            on_probe_failure: Called with the protocol and error of each failed probe
            metrics: Optional metrics to record probes and the outcome into
        """
        if retry_delay < 0:
            raise ValueError("retry_delay must not be negative")
        try:
            parse_version_range(rest_api_supported)
        except InvalidSpecifier as e:
            raise ValueError(
                f"rest_api_supported is not a valid version range: {e}"
            ) from e

        self.rest_client_factory = rest_client_factory
        self.graphql_client_factory = graphql_client_factory
        self.rest_api_supported = rest_api_supported
        self.retry_delay = retry_delay
        self._sleep = sleep
        self._on_probe_failure = on_probe_failure
        self.metrics = metrics

    def select_protocol(self, version: str) -> ApiProtocol:
        """Apply the compatibility policy to a server version."""
        if version_satisfies(version, self.rest_api_supported):
            return ApiProtocol.REST
        return ApiProtocol.GRAPHQL

    async def negotiate(
        self,
        credential: str | None,
        gate: ReadinessGate,
    ) -> ApiClientProtocol:
        """
        Wait for the server, discover its version and pick a client.

        Args:
            credential: Auth token both candidate clients are configured with
            gate: Readiness signal that must fire before any probing

        Returns:
            The REST client if the server version supports it, else the
            GraphQL client
        """
        await gate.wait_ready()
        started_at = time.monotonic()

        rest_client = self.rest_client_factory(credential)
        graphql_client = self.graphql_client_factory(credential)

        version = await self._discover_version(rest_client, graphql_client)

        api_protocol = self.select_protocol(version)
        selected = rest_client if api_protocol is ApiProtocol.REST else graphql_client

        duration = time.monotonic() - started_at
        if self.metrics is not None:
            self.metrics.record_negotiated(api_protocol, version, duration)

        logger.info(
            f"Negotiated {api_protocol.value} API for server version {version} "
            f"in {duration:.2f}s"
        )
        return selected

    async def _discover_version(
        self,
        rest_client: ApiClientProtocol,
        graphql_client: ApiClientProtocol,
    ) -> str:
        while True:
            version = await self._probe(rest_client)
            if version is None:
                version = await self._probe(graphql_client)

            if version is not None:
                return version

            if self.metrics is not None:
                self.metrics.record_retry()
            await self._sleep(self.retry_delay)

    async def _probe(self, client: ApiClientProtocol) -> str | None:
        api_protocol = client.api_protocol
        error: Exception | None = None

        try:
            version: str | None = await client.get_server_version()
        except Exception as e:
            version = None
            error = e

        succeeded = bool(version)
        if self.metrics is not None:
            self.metrics.record_probe(api_protocol, succeeded)

        if succeeded:
            return version

        label = "REST" if api_protocol is ApiProtocol.REST else "GraphQL"
        logger.info(f"Couldn't get version from {label} API: {error or 'empty version'}")
        if self._on_probe_failure is not None:
            self._on_probe_failure(api_protocol, error)
        return None


__all__ = [
    "DEFAULT_PROBE_RETRY_DELAY",
    "ClientFactory",
    "ProbeFailureCallback",
    "SleepFunc",
    "VersionNegotiator",
]
