# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Auth token resolution for the proxy server API.

The token's source depends on where the client runs:

- A foreground process is handed the token directly, as the ``authToken``
  query parameter of its location URL.
- A background worker first reads the most recently published token from a
  shared key-value store, then falls back to its own location's query
  parameter (older hosts passed the token that way). If neither has one, the
  worker runs unauthenticated; this is not an error, since the oldest hosts
  never shared a token at all.

The strategy is picked explicitly from an ExecutionContext rather than by
sniffing the runtime environment, so both paths can be exercised directly.
"""

import abc
import logging
from dataclasses import dataclass
from enum import Enum
from urllib.parse import parse_qs, urlsplit

from .config import AUTH_TOKEN_PARAM, AUTH_TOKEN_STORE_KEY
from .exceptions import ConfigurationError
from .protocols.store import TokenStoreProtocol
from .storage.base import BaseTokenStore

logger = logging.getLogger(__name__)

AuthToken = str | None


class ContextKind(Enum):
    """Execution context the client runs in."""

    FOREGROUND = "foreground"
    WORKER = "worker"


@dataclass(frozen=True)
class ExecutionContext:
    """
    Describes where the client is running.

    Attributes:
        kind: Foreground process or background worker
        location: URL the foreground process was opened with
        worker_location: URL the worker was started with (workers only)
    """

    kind: ContextKind
    location: str = ""
    worker_location: str | None = None

    @classmethod
    def foreground(cls, location: str) -> "ExecutionContext":
        return cls(kind=ContextKind.FOREGROUND, location=location)

    @classmethod
    def worker(cls, worker_location: str) -> "ExecutionContext":
        return cls(kind=ContextKind.WORKER, worker_location=worker_location)


def read_query_param(location: str | None, name: str = AUTH_TOKEN_PARAM) -> str | None:
    """Return the first value of a query parameter, or None if absent or empty."""
    if not location:
        return None

    values = parse_qs(urlsplit(location).query).get(name)
    if not values or not values[0]:
        return None
    return values[0]


class CredentialResolver(abc.ABC):
    """Resolves the auth token appropriate to one execution context."""

    @abc.abstractmethod
    async def resolve(self) -> AuthToken:
        pass


class ForegroundCredentialResolver(CredentialResolver):
    """Reads the token straight from the foreground location URL."""

    def __init__(self, location: str, param: str = AUTH_TOKEN_PARAM):
        self.location = location
        self.param = param

    async def resolve(self) -> AuthToken:
        return read_query_param(self.location, self.param)


class WorkerCredentialResolver(CredentialResolver):
    """Reads the shared token from the store, then the worker's own location."""

    def __init__(
        self,
        store: TokenStoreProtocol,
        worker_location: str | None = None,
        store_key: str = AUTH_TOKEN_STORE_KEY,
        param: str = AUTH_TOKEN_PARAM,
    ):
        self.store = store
        self.worker_location = worker_location
        self.store_key = store_key
        self.param = param

    async def resolve(self) -> AuthToken:
        token = await self.store.get_item(self.store_key)
        if token:
            return token

        token = read_query_param(self.worker_location, self.param)
        if token is None:
            logger.info("No auth token available, continuing unauthenticated")
        return token


def create_credential_resolver(
    context: ExecutionContext,
    store: TokenStoreProtocol | None = None,
    param: str = AUTH_TOKEN_PARAM,
    store_key: str = AUTH_TOKEN_STORE_KEY,
) -> CredentialResolver:
    """
    Build the resolver for an execution context.

    Args:
        context: Where the client is running
        store: Shared token store (required for worker contexts)
        param: Query parameter carrying the token
        store_key: Store key holding the latest published token

    Raises:
        ConfigurationError: If a worker context has no token store
    """
    if context.kind is ContextKind.FOREGROUND:
        return ForegroundCredentialResolver(context.location, param=param)

    if context.kind is ContextKind.WORKER:
        if store is None:
            raise ConfigurationError("A worker execution context needs a token store")
        return WorkerCredentialResolver(
            store,
            worker_location=context.worker_location,
            store_key=store_key,
            param=param,
        )

    raise ConfigurationError(f"Unknown execution context: {context.kind!r}")


async def publish_auth_token(
    store: BaseTokenStore,
    token: str,
    store_key: str = AUTH_TOKEN_STORE_KEY,
) -> None:
    """Publish a foreground token so that workers sharing the store can read it."""
    await store.set_item(store_key, token)
    logger.debug(f"Published auth token under '{store_key}'")


__all__ = [
    "AuthToken",
    "ContextKind",
    "CredentialResolver",
    "ExecutionContext",
    "ForegroundCredentialResolver",
    "WorkerCredentialResolver",
    "create_credential_resolver",
    "publish_auth_token",
    "read_query_param",
]
