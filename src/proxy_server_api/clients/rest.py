# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
REST protocol client.

Supported by newer servers (see SERVER_REST_API_SUPPORTED). It is the only
client that can send application-level requests through the server.
"""

import json
import logging
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote

import httpx

from ..exceptions import ApiError
from ..types.request import RequestDefinition, RequestOptions
from ..types.server import (
    ActivationResult,
    ApiProtocol,
    NetworkInterfaces,
    ServerConfig,
    ServerInterceptor,
)
from .base import BaseApiClient

logger = logging.getLogger(__name__)


class RestApiClient(BaseApiClient):
    """Client for the server's REST API."""

    @property
    def api_protocol(self) -> ApiProtocol:
        return ApiProtocol.REST

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
        allow_not_found: bool = False,
    ) -> Any:
        async with self._client() as client:
            try:
                response = await client.request(method, path, params=params, json=json_body)
            except httpx.RequestError as e:
                raise ApiError(f"{method} {path} failed: {e}") from e

        if allow_not_found and response.status_code == 404:
            return None
        if response.is_error:
            raise self._error_from_response(response)
        if not response.content:
            return None
        return response.json()

    async def get_server_version(self) -> str:
        body = await self._request("GET", "/version")
        return body["version"]

    async def get_config(self, proxy_port: int) -> ServerConfig:
        body = await self._request("GET", "/config", params={"proxyPort": proxy_port})
        return ServerConfig.from_dict(body["config"])

    async def get_network_interfaces(self) -> NetworkInterfaces:
        body = await self._request("GET", "/config/network-interfaces")
        return body["networkInterfaces"]

    async def get_interceptors(self, proxy_port: int) -> list[ServerInterceptor]:
        body = await self._request(
            "GET", "/interceptors", params={"proxyPort": proxy_port}
        )
        return [ServerInterceptor.from_dict(item) for item in body["interceptors"]]

    async def get_detailed_interceptor_metadata(self, interceptor_id: str) -> Any:
        body = await self._request(
            "GET",
            f"/interceptors/{quote(interceptor_id, safe='')}/metadata",
            allow_not_found=True,
        )
        if body is None:
            return None
        return body.get("interceptorMetadata")

    async def activate_interceptor(
        self,
        interceptor_id: str,
        proxy_port: int,
        options: Any = None,
    ) -> ActivationResult:
        body = await self._request(
            "POST",
            f"/interceptors/{quote(interceptor_id, safe='')}/activate/{proxy_port}",
            json_body=options,
        )
        return ActivationResult.from_response(body["result"])

    async def trigger_server_update(self) -> None:
        await self._request("POST", "/update")

    async def send_request(
        self,
        definition: RequestDefinition,
        options: RequestOptions,
    ) -> AsyncIterator[dict[str, Any]]:
        """
        Send a request through the server.

        Yields each event of the server's newline-delimited JSON response
        stream (request start, response head, body data, completion) as a
        dict, in order.
        """
        payload = {"request": definition.to_dict(), "options": options.to_dict()}

        async with self._client() as client:
            try:
                async with client.stream("POST", "/client/send", json=payload) as response:
                    if response.is_error:
                        await response.aread()
                        raise self._error_from_response(response)

                    async for line in response.aiter_lines():
                        if not line.strip():
                            continue
                        try:
                            yield json.loads(line)
                        except json.JSONDecodeError as e:
                            raise ApiError(
                                f"Malformed event in send response: {line[:100]!r}"
                            ) from e
            except httpx.RequestError as e:
                raise ApiError(f"POST /client/send failed: {e}") from e


__all__ = ["RestApiClient"]
