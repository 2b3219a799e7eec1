# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
The single entry point for talking to the locally running server.

ServerApi hides which protocol was negotiated. Every operation waits for
the negotiated client (resolved once, shared by every caller), then
delegates to it. Calls made before the server is ready simply wait.
"""

import asyncio
import functools
import json
import logging
from collections.abc import AsyncIterator
from typing import Any, cast

import httpx

from .clients import GraphQLApiClient, RestApiClient
from .config import ServerApiConfig
from .credentials import (
    AuthToken,
    CredentialResolver,
    ExecutionContext,
    create_credential_resolver,
)
from .exceptions import ActivationError, UnsupportedOperationError
from .negotiation import ProbeFailureCallback, VersionNegotiator
from .negotiation.negotiator import SleepFunc
from .observability import NegotiationMetrics, get_prometheus_negotiation_metrics
from .protocols.client import ApiClientProtocol, RequestSenderProtocol
from .protocols.store import TokenStoreProtocol
from .readiness import ReadinessGate
from .types.request import RequestDefinition, RequestOptions
from .types.server import ApiProtocol, NetworkInterfaces, ServerConfig, ServerInterceptor

logger = logging.getLogger(__name__)


class ServerApi:
    """
    Protocol-independent facade over the negotiated server API client.

    The auth token and the negotiated client are each resolved at most once,
    lazily on first use or eagerly via ``initialize()``, and never change
    afterwards. There is no re-negotiation path: if resolution fails, every
    caller sees the same failure.

    The facade must be used from a single event loop.

    Example:
        >>> api = create_server_api(ExecutionContext.foreground(url))
        >>> api.announce_server_ready()
        >>> interceptors = await api.get_interceptors(8000)
    """

    def __init__(
        self,
        credential_resolver: CredentialResolver,
        negotiator: VersionNegotiator,
        gate: ReadinessGate | None = None,
    ) -> None:
        """
        Initialize the facade.

        Args:
            credential_resolver: Strategy producing the auth token
            negotiator: Picks the protocol client once the server is ready
            gate: Readiness signal (a fresh one is created if omitted)
        """
        self._credential_resolver = credential_resolver
        self._negotiator = negotiator
        self._gate = gate or ReadinessGate()

        self._credential_task: asyncio.Task[AuthToken] | None = None
        self._client_task: asyncio.Task[ApiClientProtocol] | None = None

    # ==========================================================================
    # Lifecycle
    # ==========================================================================

    def announce_server_ready(self) -> None:
        """Tell the facade the server process is up. Later calls are no-ops."""
        self._gate.signal_ready()

    async def wait_until_server_ready(self) -> None:
        await self._gate.wait_ready()

    def initialize(self) -> "asyncio.Task[ApiClientProtocol]":
        """
        Start negotiation now rather than on the first call.

        Must be called with a running event loop. Idempotent: always returns
        the same task.
        """
        if self._client_task is None:
            self._client_task = asyncio.get_running_loop().create_task(
                self._negotiate()
            )
            logger.debug("Server API negotiation started")
        return self._client_task

    async def get_auth_token(self) -> AuthToken:
        """Resolve the auth token (once) and return it."""
        if self._credential_task is None:
            self._credential_task = asyncio.get_running_loop().create_task(
                self._credential_resolver.resolve()
            )
        return await asyncio.shield(self._credential_task)

    async def get_client(self) -> ApiClientProtocol:
        """Wait for negotiation and return the negotiated client."""
        # Shielded so a cancelled caller never cancels the shared negotiation
        return await asyncio.shield(self.initialize())

    @property
    def negotiated_protocol(self) -> ApiProtocol | None:
        """The negotiated protocol, or None while negotiation is pending or failed."""
        task = self._client_task
        if task is None or not task.done() or task.cancelled():
            return None
        if task.exception() is not None:
            return None
        return task.result().api_protocol

    async def _negotiate(self) -> ApiClientProtocol:
        credential = await self.get_auth_token()
        return await self._negotiator.negotiate(credential, self._gate)

    # ==========================================================================
    # Forwarded operations
    # ==========================================================================

    async def get_server_version(self) -> str:
        return await (await self.get_client()).get_server_version()

    async def get_config(self, proxy_port: int) -> ServerConfig:
        return await (await self.get_client()).get_config(proxy_port)

    async def get_network_interfaces(self) -> NetworkInterfaces:
        return await (await self.get_client()).get_network_interfaces()

    async def get_interceptors(self, proxy_port: int) -> list[ServerInterceptor]:
        return await (await self.get_client()).get_interceptors(proxy_port)

    async def get_detailed_interceptor_metadata(self, interceptor_id: str) -> Any:
        client = await self.get_client()
        return await client.get_detailed_interceptor_metadata(interceptor_id)

    async def activate_interceptor(
        self,
        interceptor_id: str,
        proxy_port: int,
        options: Any = None,
    ) -> Any:
        """
        Activate an interceptor and return its activation metadata.

        Raises:
            ActivationError: If the server reports the activation failed.
                ``code`` is ``activate-interceptor-{interceptor_id}`` and
                ``details`` holds the server's failure result verbatim.
        """
        client = await self.get_client()
        result = await client.activate_interceptor(interceptor_id, proxy_port, options)

        if result.success:
            return result.metadata

        logger.warning(
            f"Activation result for {interceptor_id}: "
            f"{json.dumps(result.details, default=str)}"
        )
        raise ActivationError(interceptor_id, result.details)

    async def send_request(
        self,
        definition: RequestDefinition,
        options: RequestOptions,
    ) -> AsyncIterator[dict[str, Any]]:
        """
        Send a request through the server, returning its response events.

        Raises:
            UnsupportedOperationError: If the negotiated API is GraphQL. No
                network call is made in that case.
        """
        client = await self.get_client()
        if client.api_protocol is not ApiProtocol.REST:
            raise UnsupportedOperationError(
                "Requests cannot be sent via the GraphQL API client",
                operation="send_request",
                api_protocol=client.api_protocol.value,
            )

        return cast(RequestSenderProtocol, client).send_request(definition, options)

    async def trigger_server_update(self) -> None:
        """Ask the server to check for updates. Failures are logged, never raised."""
        client = await self.get_client()
        try:
            await client.trigger_server_update()
        except Exception as e:
            logger.warning(f"Server update trigger failed: {e}")


def create_server_api(
    context: ExecutionContext,
    config: ServerApiConfig | None = None,
    store: TokenStoreProtocol | None = None,
    gate: ReadinessGate | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    metrics: NegotiationMetrics | None = None,
    sleep: SleepFunc = asyncio.sleep,
    on_probe_failure: ProbeFailureCallback | None = None,
) -> ServerApi:
    """
    Factory function to create a ServerApi with its collaborators wired up.

    Args:
        context: Where the client runs; selects the credential strategy
        config: Optional config (defaults to ServerApiConfig())
        store: Token store, required for worker contexts
        gate: Optional readiness gate to share with an external driver
        transport: Optional httpx transport for both protocol clients
        metrics: Optional negotiation metrics; when omitted and
            config.metrics_enabled is set, the Prometheus singleton is used
        sleep: Coroutine used between probe rounds
        on_probe_failure: Called for each failed version probe

    Returns:
        Configured ServerApi instance

    Raises:
        ConfigurationError: If a worker context has no token store
    """
    if config is None:
        config = ServerApiConfig()

    if metrics is None and config.metrics_enabled:
        metrics = get_prometheus_negotiation_metrics()

    credential_resolver = create_credential_resolver(
        context,
        store=store,
        param=config.auth_token_param,
        store_key=config.auth_token_store_key,
    )

    negotiator = VersionNegotiator(
        rest_client_factory=functools.partial(
            _build_rest_client, config=config, transport=transport
        ),
        graphql_client_factory=functools.partial(
            _build_graphql_client, config=config, transport=transport
        ),
        rest_api_supported=config.rest_api_supported,
        retry_delay=config.probe_retry_delay,
        sleep=sleep,
        on_probe_failure=on_probe_failure,
        metrics=metrics,
    )

    return ServerApi(credential_resolver, negotiator, gate=gate)


def _build_rest_client(
    auth_token: AuthToken,
    config: ServerApiConfig,
    transport: httpx.AsyncBaseTransport | None,
) -> RestApiClient:
    return RestApiClient(
        auth_token,
        api_url=config.api_url,
        timeout=config.request_timeout,
        transport=transport,
    )


def _build_graphql_client(
    auth_token: AuthToken,
    config: ServerApiConfig,
    transport: httpx.AsyncBaseTransport | None,
) -> GraphQLApiClient:
    return GraphQLApiClient(
        auth_token,
        api_url=config.api_url,
        timeout=config.request_timeout,
        transport=transport,
        graphql_path=config.graphql_path,
    )


__all__ = ["ServerApi", "create_server_api"]
