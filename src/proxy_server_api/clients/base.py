# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Shared plumbing for the REST and GraphQL protocol clients."""

import abc
import logging
from typing import Any

import httpx

from ..config import DEFAULT_API_URL
from ..exceptions import ApiError
from ..types.server import ApiProtocol

logger = logging.getLogger(__name__)


class BaseApiClient(abc.ABC):
    """
    Base class for protocol clients.

    Each call opens its own ``httpx.AsyncClient``, so clients hold no
    connections and need no teardown.
    """

    def __init__(
        self,
        auth_token: str | None = None,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            auth_token: Token sent as a bearer credential (None = unauthenticated)
            api_url: Base URL of the server's API
            timeout: Per-call timeout in seconds
            transport: Optional httpx transport, mainly for tests
        """
        self.auth_token = auth_token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    @abc.abstractmethod
    def api_protocol(self) -> ApiProtocol:
        pass

    def get_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.api_url,
            headers=self.get_headers(),
            timeout=self.timeout,
            transport=self._transport,
        )

    @staticmethod
    def _error_from_response(response: httpx.Response) -> ApiError:
        """Build an ApiError from a failed response, using its error body if any."""
        code: str | None = None
        message = f"Server responded with {response.status_code} for {response.request.url.path}"

        try:
            body: Any = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            error = body["error"]
            code = error.get("code")
            message = error.get("message") or message

        return ApiError(message, code=code, status_code=response.status_code)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(api_url={self.api_url!r})"


__all__ = ["BaseApiClient"]
