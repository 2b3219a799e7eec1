# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Proxy Server API - protocol-negotiating client for a local proxy server.

The server speaks a REST API (newer versions) and a GraphQL API (every
version). This library works out, once per session, which one to use and
exposes a single facade over it.

Key Features:
    - Waits for an externally signalled readiness event before probing
    - Retries version probes until the server answers, then picks a protocol
    - Resolves the auth token from the foreground URL or a shared token store
    - Memoizes the negotiated client so every call reuses it
    - Multiple token store options (memory, Redis)

Quick Start:
    >>> from proxy_server_api import ExecutionContext, create_server_api
    >>>
    >>> api = create_server_api(
    ...     ExecutionContext.foreground("app://ui/?authToken=abc123")
    ... )
    >>> api.announce_server_ready()  # once the server process is up
    >>> interceptors = await api.get_interceptors(proxy_port=8000)

Main Exports:
    - ServerApi, create_server_api: The facade and its factory
    - VersionNegotiator, ReadinessGate: Negotiation building blocks
    - RestApiClient, GraphQLApiClient: Protocol clients
    - MemoryTokenStore, RedisTokenStore: Token stores
    - ServerApiConfig: Configuration options

Note: RedisTokenStore requires the 'redis' extra. Install with:
    pip install proxy-server-api[redis]

Version: 1.0.0
"""

__version__ = "1.0.0"

from typing import TYPE_CHECKING

from .clients import ApiClient, GraphQLApiClient, RestApiClient
from .config import RedisStoreConfig, ServerApiConfig
from .credentials import (
    ContextKind,
    CredentialResolver,
    ExecutionContext,
    ForegroundCredentialResolver,
    WorkerCredentialResolver,
    create_credential_resolver,
    publish_auth_token,
)
from .exceptions import (
    ActivationError,
    ApiError,
    ConfigurationError,
    ServerApiError,
    StoreConnectionError,
    StoreOperationError,
    TokenStoreError,
    UnsupportedOperationError,
)
from .facade import ServerApi, create_server_api
from .negotiation import SERVER_REST_API_SUPPORTED, VersionNegotiator, version_satisfies
from .observability import NegotiationMetrics, PrometheusNegotiationMetrics
from .protocols import ApiClientProtocol, RequestSenderProtocol, TokenStoreProtocol
from .readiness import ReadinessGate
from .storage import BaseTokenStore, MemoryTokenStore
from .types import (
    ActivationResult,
    ApiProtocol,
    NetworkInterfaces,
    RequestDefinition,
    RequestOptions,
    ServerConfig,
    ServerInterceptor,
)

# Lazy import for optional redis store
if TYPE_CHECKING:
    from .storage import RedisTokenStore

__all__ = [
    "SERVER_REST_API_SUPPORTED",
    "ActivationError",
    "ActivationResult",
    # Clients
    "ApiClient",
    "ApiClientProtocol",
    # Exceptions
    "ApiError",
    # Types
    "ApiProtocol",
    # Stores
    "BaseTokenStore",
    "ConfigurationError",
    # Credentials
    "ContextKind",
    "CredentialResolver",
    "ExecutionContext",
    "ForegroundCredentialResolver",
    "GraphQLApiClient",
    "MemoryTokenStore",
    # Observability
    "NegotiationMetrics",
    "NetworkInterfaces",
    "PrometheusNegotiationMetrics",
    # Negotiation
    "ReadinessGate",
    "RedisStoreConfig",
    "RedisTokenStore",  # Lazy loaded - requires redis extra
    "RequestDefinition",
    "RequestOptions",
    "RequestSenderProtocol",
    "RestApiClient",
    # Facade
    "ServerApi",
    "ServerApiConfig",
    "ServerApiError",
    "ServerConfig",
    "ServerInterceptor",
    "StoreConnectionError",
    "StoreOperationError",
    "TokenStoreError",
    "TokenStoreProtocol",
    "UnsupportedOperationError",
    "VersionNegotiator",
    "WorkerCredentialResolver",
    "create_credential_resolver",
    "create_server_api",
    "publish_auth_token",
    "version_satisfies",
]


def __getattr__(name: str) -> type:
    """Lazy import for optional redis store."""
    if name == "RedisTokenStore":
        from .storage import RedisTokenStore

        return RedisTokenStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
