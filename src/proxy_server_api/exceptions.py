# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the proxy server API client.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from ServerApiError, making it easy to catch
all server API related exceptions with a single except clause.
"""

from typing import Any


class ServerApiError(Exception):
    """Base exception for all proxy server API errors.

    Example:
        try:
            await api.get_config(8000)
        except ServerApiError as e:
            logger.error(f"Server API error: {e}")
    """

    pass


class ApiError(ServerApiError):
    """Raised when a protocol client call to the server fails.

    Both the REST and the GraphQL clients raise this for error responses,
    so callers see a uniform error regardless of the negotiated protocol.

    Attributes:
        code: Stable machine-readable error identifier, if the server (or
            the caller) supplied one.
        status_code: HTTP status code of the failing response, if any.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class ActivationError(ApiError):
    """Raised when the server reports that an interceptor failed to activate.

    The error carries a uniform identifier (``activate-interceptor-{id}``)
    alongside every field of the server's failure result, so callers can
    inspect protocol-specific diagnostics without caring which API was used.
    Failure fields are available both in ``details`` and as attributes,
    unless they would shadow an attribute of the exception itself.

    Attributes:
        interceptor_id: The interceptor that failed to activate.
        details: All fields of the failure result, verbatim.

    Example:
        try:
            await api.activate_interceptor("docker-attach", 8000)
        except ActivationError as e:
            if e.details.get("metadata"):
                show_activation_help(e.details["metadata"])
    """

    def __init__(self, interceptor_id: str, details: dict[str, Any] | None = None):
        super().__init__(
            f"failed to activate interceptor {interceptor_id}",
            code=f"activate-interceptor-{interceptor_id}",
        )
        self.interceptor_id = interceptor_id
        self.details: dict[str, Any] = dict(details or {})

        for key, value in self.details.items():
            if not hasattr(self, key):
                setattr(self, key, value)


class UnsupportedOperationError(ServerApiError):
    """Raised when an operation is not supported by the negotiated backend.

    This is a programming error rather than a transient condition: the
    negotiated protocol never changes, so retrying cannot succeed.

    Attributes:
        operation: Name of the unsupported operation.
        api_protocol: Value of the protocol that rejected the operation.
    """

    def __init__(self, message: str, operation: str, api_protocol: str):
        super().__init__(message)
        self.operation = operation
        self.api_protocol = api_protocol


class ConfigurationError(ServerApiError):
    """Raised when configuration is invalid or incomplete.

    Common causes include:
    - A worker execution context without a token store
    - An unknown execution context kind
    """

    pass


class TokenStoreError(ServerApiError):
    """Base exception for token store failures."""

    pass


class StoreConnectionError(TokenStoreError):
    """Raised when connection to the token store fails.

    Example:
        try:
            token = await store.get_item("latest-auth-token")
        except StoreConnectionError:
            logger.warning("Token store unavailable, continuing unauthenticated")
    """

    pass


class StoreOperationError(TokenStoreError):
    """Raised when a token store operation fails after connecting."""

    pass


__all__ = [
    "ActivationError",
    "ApiError",
    "ConfigurationError",
    "ServerApiError",
    "StoreConnectionError",
    "StoreOperationError",
    "TokenStoreError",
    "UnsupportedOperationError",
]
