# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Base Token Store for the proxy server API client

This module provides the BaseTokenStore abstract class that defines the
common interface for the key-value stores used to share the auth token
between a foreground process and its background workers.
"""

import abc
import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class HealthCheckResult:
    """
    Structured health check result for token store monitoring.

    Attributes:
        healthy: Whether the store is operational
        store_type: Type of store (e.g., 'redis', 'memory')
        namespace: Store namespace
        error: Error message if unhealthy
        metadata: Additional store-specific information
    """

    healthy: bool
    store_type: str
    namespace: str
    error: str | None = None
    metadata: dict[str, Any] | None = None


class BaseTokenStore(abc.ABC):
    """
    An abstract base class for persistent string key-value stores.

    Stores satisfy TokenStoreProtocol through ``get_item``; the write
    operations are used by the publishing side (``publish_auth_token``), never
    by the credential resolver.
    """

    def __init__(self, namespace: str = "proxy_server_api"):
        """
        Initialize the store with a namespace for isolation.

        Args:
            namespace: Namespace for isolating data across applications
        """
        self.namespace = namespace

    @abc.abstractmethod
    async def get_item(self, key: str) -> str | None:
        """
        Get the value stored under a key.

        Args:
            key: The key to look up

        Returns:
            The stored string, or None if the key is absent or expired
        """
        pass

    @abc.abstractmethod
    async def set_item(self, key: str, value: str, ttl: float | None = None) -> None:
        """
        Store a value under a key.

        Args:
            key: The key to store under
            value: The string to store
            ttl: Optional time-to-live in seconds
        """
        pass

    @abc.abstractmethod
    async def remove_item(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if the key existed, False otherwise
        """
        pass

    @abc.abstractmethod
    async def clear(self) -> None:
        """Remove every key in this store's namespace."""
        pass

    @abc.abstractmethod
    async def health_check(self) -> HealthCheckResult:
        """Check whether the store is reachable and operational."""
        pass


__all__ = ["BaseTokenStore", "HealthCheckResult"]
