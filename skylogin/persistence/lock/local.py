"""In-process request lock."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import logfire

from skylogin.domain.error import LockNotAcquiredError
from skylogin.domain.repository import RequestLock

T = TypeVar("T")


class LocalRequestLock(RequestLock):
    """Keyed mutex for single-instance deployments.

    Each busy key owns an ``asyncio.Lock``; waiters queue on it in arrival
    order. The entry is dropped once no task holds or waits for the key,
    so the map only contains keys that are in use.

    Exclusion only holds inside this process. Several app instances
    sharing one session store must use RedisRequestLock instead.
    """

    def __init__(self, timeout_seconds: float | None = None) -> None:
        """Initialize lock.

        Args:
            timeout_seconds: Maximum time to wait for a busy key, or None
                to wait indefinitely
        """
        self.timeout_seconds = timeout_seconds
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    async def with_lock(
        self, key: str, critical_section: Callable[[], Awaitable[T]]
    ) -> T:
        """Run ``critical_section`` once every earlier holder of ``key`` is done."""
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            try:
                # Cancels acquire() in place; a lock granted at the deadline is
                # handed back by asyncio.Lock itself
                async with asyncio.timeout(self.timeout_seconds):
                    await lock.acquire()
            except TimeoutError as e:
                logfire.warn(
                    "Request lock wait timed out",
                    key=key,
                    timeout_seconds=self.timeout_seconds,
                )
                raise LockNotAcquiredError(key) from e
            try:
                return await critical_section()
            finally:
                lock.release()
        finally:
            self._release_entry(key)

    def _release_entry(self, key: str) -> None:
        remaining = self._users[key] - 1
        if remaining:
            self._users[key] = remaining
        else:
            del self._users[key]
            del self._locks[key]

    def is_locked(self, key: str) -> bool:
        """Whether some task currently holds ``key``."""
        lock = self._locks.get(key)
        return lock is not None and lock.locked()
