from unittest.mock import patch

import pytest

from proxy_server_api.protocols import TokenStoreProtocol
from proxy_server_api.storage.memory import MemoryTokenStore


class TestMemoryTokenStore:
    @pytest.fixture
    def store(self):
        return MemoryTokenStore(namespace="test")

    def test_init(self):
        store = MemoryTokenStore(namespace="test_ns", default_ttl=60)
        assert store.namespace == "test_ns"
        assert store.default_ttl == 60
        assert store._items == {}

    def test_satisfies_token_store_protocol(self, store):
        assert isinstance(store, TokenStoreProtocol)

    @pytest.mark.asyncio
    async def test_get_set_item(self, store):
        await store.set_item("latest-auth-token", "abc")
        assert await store.get_item("latest-auth-token") == "abc"

    @pytest.mark.asyncio
    async def test_get_missing_item(self, store):
        assert await store.get_item("nonexistent") is None

    @pytest.mark.asyncio
    async def test_overwrite(self, store):
        await store.set_item("k", "old")
        await store.set_item("k", "new")
        assert await store.get_item("k") == "new"

    @pytest.mark.asyncio
    async def test_remove_item(self, store):
        await store.set_item("k", "v")
        assert await store.remove_item("k") is True
        assert await store.remove_item("k") is False
        assert await store.get_item("k") is None

    @pytest.mark.asyncio
    async def test_clear(self, store):
        await store.set_item("a", "1")
        await store.set_item("b", "2")
        await store.clear()
        assert await store.get_item("a") is None
        assert await store.get_item("b") is None

    @pytest.mark.asyncio
    async def test_expired_items_are_dropped(self, store):
        with patch("proxy_server_api.storage.memory.time.monotonic", return_value=100.0):
            await store.set_item("k", "v", ttl=10)

        with patch("proxy_server_api.storage.memory.time.monotonic", return_value=105.0):
            assert await store.get_item("k") == "v"

        with patch("proxy_server_api.storage.memory.time.monotonic", return_value=111.0):
            assert await store.get_item("k") is None
        assert "k" not in store._items

    @pytest.mark.asyncio
    async def test_default_ttl_applies(self):
        store = MemoryTokenStore(default_ttl=5)
        with patch("proxy_server_api.storage.memory.time.monotonic", return_value=0.0):
            await store.set_item("k", "v")

        assert store._items["k"] == ("v", 5.0)

    @pytest.mark.asyncio
    async def test_health_check(self, store):
        await store.set_item("k", "v")
        result = await store.health_check()

        assert result.healthy is True
        assert result.store_type == "memory"
        assert result.namespace == "test"
        assert result.metadata == {"item_count": 1}
