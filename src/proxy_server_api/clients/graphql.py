# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
GraphQL protocol client.

Every server version speaks GraphQL, so this is the fallback when the
server is too old for the REST API. It cannot send requests.
"""

import logging
from typing import Any

import httpx

from ..config import DEFAULT_API_URL
from ..exceptions import ApiError
from ..types.server import (
    ActivationResult,
    ApiProtocol,
    NetworkInterfaces,
    ServerConfig,
    ServerInterceptor,
)
from .base import BaseApiClient

logger = logging.getLogger(__name__)

VERSION_QUERY = "query getVersion { version }"

CONFIG_QUERY = """
query getConfig($proxyPort: Int!) {
    config {
        certificatePath
        certificateContent
        certificateFingerprint
    }
    networkInterfaces
    systemProxy {
        proxyUrl
        noProxy
    }
    dnsServers(proxyPort: $proxyPort)
    ruleParameterKeys
}
"""

NETWORK_INTERFACES_QUERY = "query getNetworkInterfaces { networkInterfaces }"

INTERCEPTORS_QUERY = """
query getInterceptors($proxyPort: Int!) {
    interceptors {
        id
        version
        metadata
        isActivable
        isActive(proxyPort: $proxyPort)
    }
}
"""

DETAILED_METADATA_QUERY = """
query getDetailedInterceptorMetadata($id: ID!) {
    interceptor(id: $id) {
        metadata(type: DETAILED)
    }
}
"""

ACTIVATE_MUTATION = """
mutation Activate($id: ID!, $proxyPort: Int!, $options: Json) {
    activateInterceptor(id: $id, proxyPort: $proxyPort, options: $options)
}
"""

TRIGGER_UPDATE_MUTATION = "mutation TriggerUpdate { triggerUpdate }"


class GraphQLApiClient(BaseApiClient):
    """Client for the server's GraphQL API."""

    def __init__(
        self,
        auth_token: str | None = None,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        graphql_path: str = "/",
    ):
        super().__init__(auth_token, api_url, timeout, transport)
        self.graphql_path = graphql_path

    @property
    def api_protocol(self) -> ApiProtocol:
        return ApiProtocol.GRAPHQL

    async def _query(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        payload = {"query": query, "variables": variables or {}}

        async with self._client() as client:
            try:
                response = await client.post(self.graphql_path, json=payload)
            except httpx.RequestError as e:
                raise ApiError(f"GraphQL request failed: {e}") from e

        if response.is_error:
            raise self._error_from_response(response)

        body = response.json()
        errors = body.get("errors")
        if errors:
            messages = "; ".join(str(error.get("message", error)) for error in errors)
            code = (errors[0].get("extensions") or {}).get("code")
            raise ApiError(f"GraphQL error: {messages}", code=code)

        return body.get("data") or {}

    async def get_server_version(self) -> str:
        data = await self._query(VERSION_QUERY)
        return data["version"]

    async def get_config(self, proxy_port: int) -> ServerConfig:
        data = await self._query(CONFIG_QUERY, {"proxyPort": proxy_port})
        return ServerConfig.from_dict(
            {
                **data["config"],
                "networkInterfaces": data.get("networkInterfaces"),
                "systemProxy": data.get("systemProxy"),
                "dnsServers": data.get("dnsServers"),
                "ruleParameterKeys": data.get("ruleParameterKeys"),
            }
        )

    async def get_network_interfaces(self) -> NetworkInterfaces:
        data = await self._query(NETWORK_INTERFACES_QUERY)
        return data["networkInterfaces"]

    async def get_interceptors(self, proxy_port: int) -> list[ServerInterceptor]:
        data = await self._query(INTERCEPTORS_QUERY, {"proxyPort": proxy_port})
        return [ServerInterceptor.from_dict(item) for item in data["interceptors"]]

    async def get_detailed_interceptor_metadata(self, interceptor_id: str) -> Any:
        data = await self._query(DETAILED_METADATA_QUERY, {"id": interceptor_id})
        interceptor = data.get("interceptor")
        if interceptor is None:
            return None
        return interceptor.get("metadata")

    async def activate_interceptor(
        self,
        interceptor_id: str,
        proxy_port: int,
        options: Any = None,
    ) -> ActivationResult:
        data = await self._query(
            ACTIVATE_MUTATION,
            {"id": interceptor_id, "proxyPort": proxy_port, "options": options},
        )
        return ActivationResult.from_response(data.get("activateInterceptor"))

    async def trigger_server_update(self) -> None:
        await self._query(TRIGGER_UPDATE_MUTATION)


__all__ = ["GraphQLApiClient"]
