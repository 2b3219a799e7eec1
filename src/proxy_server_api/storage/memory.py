# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
MemoryTokenStore for the proxy server API client

In-process token store, for single-process deployments and tests.
"""

import asyncio
import logging
import time

from .base import BaseTokenStore, HealthCheckResult

logger = logging.getLogger(__name__)


class MemoryTokenStore(BaseTokenStore):
    """
    In-memory key-value store with optional per-key expiry.

    Expired keys are dropped lazily when read.
    """

    def __init__(
        self,
        namespace: str = "proxy_server_api",
        default_ttl: float | None = None,
    ):
        """
        Initialize the memory store.

        Args:
            namespace: Namespace for isolating data
            default_ttl: TTL in seconds applied when set_item gets none (None = never expire)
        """
        super().__init__(namespace)
        self.default_ttl = default_ttl
        self._items: dict[str, tuple[str, float | None]] = {}
        self._lock = asyncio.Lock()

    def _is_expired(self, expiry: float | None) -> bool:
        return expiry is not None and time.monotonic() >= expiry

    async def get_item(self, key: str) -> str | None:
        async with self._lock:
            entry = self._items.get(key)
            if entry is None:
                return None

            value, expiry = entry
            if self._is_expired(expiry):
                del self._items[key]
                return None
            return value

    async def set_item(self, key: str, value: str, ttl: float | None = None) -> None:
        ttl = ttl if ttl is not None else self.default_ttl
        expiry = time.monotonic() + ttl if ttl is not None else None

        async with self._lock:
            self._items[key] = (value, expiry)

    async def remove_item(self, key: str) -> bool:
        async with self._lock:
            return self._items.pop(key, None) is not None

    async def clear(self) -> None:
        async with self._lock:
            self._items.clear()

    async def health_check(self) -> HealthCheckResult:
        async with self._lock:
            item_count = len(self._items)

        return HealthCheckResult(
            healthy=True,
            store_type="memory",
            namespace=self.namespace,
            metadata={"item_count": item_count},
        )


__all__ = ["MemoryTokenStore"]
