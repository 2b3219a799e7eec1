# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Token store implementations.

Available stores:
- BaseTokenStore: Abstract base class defining the store interface
- MemoryTokenStore: In-process store for single-process deployments
- RedisTokenStore: Redis-based store shared across processes (requires redis extra)

Supporting types:
- HealthCheckResult: Structured result from store health checks

Note: RedisTokenStore is lazily imported to avoid requiring the redis
package when only using MemoryTokenStore.
"""

from typing import TYPE_CHECKING, cast

from proxy_server_api.storage.base import BaseTokenStore, HealthCheckResult
from proxy_server_api.storage.memory import MemoryTokenStore

# Lazy import for optional redis store
if TYPE_CHECKING:
    from proxy_server_api.storage.redis import RedisTokenStore

__all__ = [
    "BaseTokenStore",
    "HealthCheckResult",
    "MemoryTokenStore",
    "RedisTokenStore",
]


def __getattr__(name: str) -> type:
    """Lazy import for optional redis store."""
    if name == "RedisTokenStore":
        try:
            from proxy_server_api.storage import redis as redis_module

            return cast(type, redis_module.RedisTokenStore)
        except ImportError as e:  # pragma: no cover
            raise ImportError(  # pragma: no cover
                "'RedisTokenStore' requires the 'redis' extra. "
                "Install with: pip install proxy-server-api[redis]"
            ) from e
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
