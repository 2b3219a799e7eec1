"""Unit tests for ReadinessGate."""

import asyncio

import pytest

from proxy_server_api.readiness import ReadinessGate


class TestReadinessGate:
    @pytest.mark.asyncio
    async def test_starts_not_ready(self):
        gate = ReadinessGate()
        assert gate.is_ready is False

    @pytest.mark.asyncio
    async def test_waiter_blocks_until_signalled(self):
        gate = ReadinessGate()
        waiter = asyncio.create_task(gate.wait_ready())

        await asyncio.sleep(0.01)
        assert not waiter.done()

        gate.signal_ready()
        await asyncio.wait_for(waiter, timeout=1)
        assert gate.is_ready is True

    @pytest.mark.asyncio
    async def test_one_signal_releases_every_waiter(self):
        gate = ReadinessGate()
        waiters = [asyncio.create_task(gate.wait_ready()) for _ in range(5)]
        await asyncio.sleep(0)

        gate.signal_ready()

        results = await asyncio.wait_for(asyncio.gather(*waiters), timeout=1)
        assert results == [None] * 5

    @pytest.mark.asyncio
    async def test_waiters_after_signal_return_immediately(self):
        gate = ReadinessGate()
        gate.signal_ready()

        assert await asyncio.wait_for(gate.wait_ready(), timeout=1) is None

    @pytest.mark.asyncio
    async def test_signal_is_idempotent(self):
        gate = ReadinessGate()
        early = asyncio.create_task(gate.wait_ready())
        await asyncio.sleep(0)

        gate.signal_ready()
        gate.signal_ready()
        late = asyncio.create_task(gate.wait_ready())

        await asyncio.wait_for(asyncio.gather(early, late), timeout=1)
        assert gate.is_ready is True
