# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Configuration for the proxy server API client.

This module provides configuration classes for protocol negotiation,
the protocol clients, and the Redis token store.
"""

from dataclasses import dataclass

from packaging.specifiers import InvalidSpecifier

from .negotiation.versions import SERVER_REST_API_SUPPORTED, parse_version_range

DEFAULT_API_URL = "http://127.0.0.1:45457"
AUTH_TOKEN_PARAM = "authToken"
AUTH_TOKEN_STORE_KEY = "latest-auth-token"


@dataclass
class ServerApiConfig:
    """
    Configuration for the server API facade and its protocol clients.
    """

    # === Server Connection ===

    api_url: str = DEFAULT_API_URL
    """Base URL of the locally running server's API."""

    graphql_path: str = "/"
    """Path (relative to api_url) that accepts GraphQL POST requests."""

    request_timeout: float = 30.0
    """Timeout in seconds for each individual API call."""

    # === Negotiation ===

    probe_retry_delay: float = 0.1
    """Delay in seconds between rounds of failed version probes."""

    rest_api_supported: str = SERVER_REST_API_SUPPORTED
    """Version range of servers that support the REST API."""

    # === Credentials ===

    auth_token_param: str = AUTH_TOKEN_PARAM
    """Query parameter that carries the auth token in a location URL."""

    auth_token_store_key: str = AUTH_TOKEN_STORE_KEY
    """Token store key holding the most recently published auth token."""

    # === Metrics and Monitoring ===

    metrics_enabled: bool = False
    """Export negotiation metrics through prometheus_client."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.api_url:
            raise ValueError("api_url must not be empty")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        if self.probe_retry_delay < 0:
            raise ValueError("probe_retry_delay must not be negative")
        if not self.graphql_path.startswith("/"):
            raise ValueError("graphql_path must start with '/'")
        if not self.auth_token_param or not self.auth_token_store_key:
            raise ValueError("auth token parameter and store key must not be empty")
        try:
            parse_version_range(self.rest_api_supported)
        except InvalidSpecifier as e:
            raise ValueError(
                f"rest_api_supported is not a valid version range: {e}"
            ) from e

    @property
    def graphql_url(self) -> str:
        return self.api_url.rstrip("/") + self.graphql_path


@dataclass
class RedisStoreConfig:
    """
    Configuration for the Redis-backed token store.
    """

    redis_url: str = "redis://localhost:6379"
    """Redis connection URL."""

    namespace: str = "proxy_server_api"
    """Key prefix isolating this application's entries."""

    socket_timeout: float = 5.0
    """Socket timeout in seconds for Redis operations."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.namespace:
            raise ValueError("namespace must not be empty")
        if self.socket_timeout <= 0:
            raise ValueError("socket_timeout must be positive")


__all__ = [
    "AUTH_TOKEN_PARAM",
    "AUTH_TOKEN_STORE_KEY",
    "DEFAULT_API_URL",
    "RedisStoreConfig",
    "ServerApiConfig",
]
