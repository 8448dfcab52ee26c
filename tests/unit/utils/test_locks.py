"""Tests for KeyedLock."""

import asyncio

import pytest

from announcecast.utils.locks import KeyedLock


class TestKeyedLock:
    """Tests for per-key serialization."""

    @pytest.mark.asyncio
    async def test_same_key_runs_one_at_a_time(self):
        """Critical sections on one key never overlap."""
        locks = KeyedLock()
        active = 0
        peak = 0

        async def worker():
            nonlocal active, peak
            async with locks.hold("feed"):
                active += 1
                peak = max(peak, active)
                await asyncio.sleep(0.01)
                active -= 1

        await asyncio.gather(*(worker() for _ in range(5)))

        assert peak == 1

    @pytest.mark.asyncio
    async def test_same_key_preserves_arrival_order(self):
        locks = KeyedLock()
        order = []

        async def worker(index):
            async with locks.hold("feed"):
                await asyncio.sleep(0)
                order.append(index)

        await asyncio.gather(*(worker(i) for i in range(4)))

        assert order == [0, 1, 2, 3]

    @pytest.mark.asyncio
    async def test_different_keys_run_concurrently(self):
        """Holding one key does not block another."""
        locks = KeyedLock()

        async with locks.hold("a"):
            async with locks.hold("b"):
                assert locks.is_locked("a")
                assert locks.is_locked("b")

    @pytest.mark.asyncio
    async def test_lock_released_after_block(self):
        locks = KeyedLock()

        async with locks.hold("feed"):
            assert locks.is_locked("feed")

        assert not locks.is_locked("feed")
        assert locks._locks == {}

    @pytest.mark.asyncio
    async def test_lock_released_on_error(self):
        locks = KeyedLock()

        with pytest.raises(RuntimeError):
            async with locks.hold("feed"):
                raise RuntimeError("boom")

        assert not locks.is_locked("feed")
