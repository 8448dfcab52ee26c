"""Per-key asyncio locks."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class KeyedLock:
    """Serializes coroutines that touch the same key.

    Work on different keys runs freely; work on the same key runs one
    at a time, in arrival order.

    Example:
        >>> locks = KeyedLock()
        >>> async with locks.hold("https://example.com/feed.xml"):
        ...     ...
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiters: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        """Hold the lock for ``key`` for the duration of the block."""
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                # Nobody else is queued, drop the lock so the map stays small
                del self._waiters[key]
                del self._locks[key]

    def is_locked(self, key: str) -> bool:
        """Check whether some task currently holds ``key``."""
        lock = self._locks.get(key)
        return lock is not None and lock.locked()
