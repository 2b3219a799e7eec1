# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
RedisTokenStore for the proxy server API client

This module provides a Redis-backed token store, letting a foreground
process publish its auth token for background workers running in other
processes or on other hosts.
"""

import asyncio
import logging
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import ConnectionError, RedisError, TimeoutError

from ..config import RedisStoreConfig
from ..exceptions import StoreConnectionError, StoreOperationError
from .base import BaseTokenStore, HealthCheckResult

logger = logging.getLogger(__name__)


class RedisTokenStore(BaseTokenStore):
    """
    Token store backed by Redis string keys.

    Keys are prefixed with the namespace (``{namespace}:{key}``). Connection
    failures surface as StoreConnectionError, all other Redis failures as
    StoreOperationError.
    """

    def __init__(
        self,
        config: RedisStoreConfig | None = None,
        redis_client: Any | None = None,
    ):
        """
        Initialize the Redis store.

        Args:
            config: Connection settings (defaults to RedisStoreConfig())
            redis_client: Pre-built async Redis client, mainly for tests
        """
        self.config = config or RedisStoreConfig()
        super().__init__(self.config.namespace)
        self.redis_url = self.config.redis_url
        self._redis: Any | None = redis_client
        self._connection_lock = asyncio.Lock()

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    async def _ensure_connected(self) -> Any:
        if self._redis is not None:
            return self._redis

        async with self._connection_lock:
            if self._redis is None:
                logger.debug(f"Connecting token store to {self.redis_url}")
                self._redis = Redis.from_url(
                    self.redis_url,
                    decode_responses=True,
                    socket_timeout=self.config.socket_timeout,
                )
        return self._redis

    async def get_item(self, key: str) -> str | None:
        redis_client = await self._ensure_connected()
        try:
            value = await redis_client.get(self._key(key))
        except (ConnectionError, TimeoutError) as e:
            raise StoreConnectionError(f"Redis unavailable: {e}") from e
        except RedisError as e:
            raise StoreOperationError(f"Failed to read '{key}': {e}") from e

        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set_item(self, key: str, value: str, ttl: float | None = None) -> None:
        redis_client = await self._ensure_connected()
        try:
            if ttl is not None:
                await redis_client.set(self._key(key), value, px=int(ttl * 1000))
            else:
                await redis_client.set(self._key(key), value)
        except (ConnectionError, TimeoutError) as e:
            raise StoreConnectionError(f"Redis unavailable: {e}") from e
        except RedisError as e:
            raise StoreOperationError(f"Failed to write '{key}': {e}") from e

    async def remove_item(self, key: str) -> bool:
        redis_client = await self._ensure_connected()
        try:
            removed = await redis_client.delete(self._key(key))
        except (ConnectionError, TimeoutError) as e:
            raise StoreConnectionError(f"Redis unavailable: {e}") from e
        except RedisError as e:
            raise StoreOperationError(f"Failed to remove '{key}': {e}") from e
        return bool(removed)

    async def clear(self) -> None:
        redis_client = await self._ensure_connected()
        try:
            keys = [key async for key in redis_client.scan_iter(match=self._key("*"))]
            if keys:
                await redis_client.delete(*keys)
        except (ConnectionError, TimeoutError) as e:
            raise StoreConnectionError(f"Redis unavailable: {e}") from e
        except RedisError as e:
            raise StoreOperationError(f"Failed to clear namespace: {e}") from e

    async def health_check(self) -> HealthCheckResult:
        """Perform health check on the store."""
        try:
            redis_client = await self._ensure_connected()
            await redis_client.ping()

            return HealthCheckResult(
                healthy=True,
                store_type="redis",
                namespace=self.namespace,
                metadata={"redis_url": self.redis_url},
            )
        except Exception as e:
            return HealthCheckResult(
                healthy=False,
                store_type="redis",
                namespace=self.namespace,
                error=str(e),
            )

    async def close(self) -> None:
        """Close the underlying connection pool, if one was opened."""
        if self._redis is None:
            return

        try:
            await self._redis.aclose()
        except RedisError as e:
            logger.debug(f"Error closing Redis connection: {e}")
        finally:
            self._redis = None


__all__ = ["RedisTokenStore"]
