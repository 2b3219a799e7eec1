# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocols for the server's protocol clients."""

from collections.abc import AsyncIterator
from typing import Any, Protocol, runtime_checkable

from ..types.request import RequestDefinition, RequestOptions
from ..types.server import (
    ActivationResult,
    ApiProtocol,
    NetworkInterfaces,
    ServerConfig,
    ServerInterceptor,
)


@runtime_checkable
class ApiClientProtocol(Protocol):
    """
    Capabilities shared by the REST and GraphQL clients.

    The facade only relies on this surface, plus ``api_protocol`` to decide
    whether the REST-only capabilities are available.
    """

    @property
    def api_protocol(self) -> ApiProtocol:
        """The protocol this client speaks."""
        ...

    async def get_server_version(self) -> str: ...

    async def get_config(self, proxy_port: int) -> ServerConfig: ...

    async def get_network_interfaces(self) -> NetworkInterfaces: ...

    async def get_interceptors(self, proxy_port: int) -> list[ServerInterceptor]: ...

    async def get_detailed_interceptor_metadata(self, interceptor_id: str) -> Any: ...

    async def activate_interceptor(
        self,
        interceptor_id: str,
        proxy_port: int,
        options: Any = None,
    ) -> ActivationResult: ...

    async def trigger_server_update(self) -> None: ...


@runtime_checkable
class RequestSenderProtocol(Protocol):
    """Capability to send application-level requests (REST API only)."""

    def send_request(
        self,
        definition: RequestDefinition,
        options: RequestOptions,
    ) -> AsyncIterator[dict[str, Any]]:
        """Send a request, yielding the server's response events."""
        ...
