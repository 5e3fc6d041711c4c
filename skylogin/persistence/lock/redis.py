"""Redis-backed distributed request lock."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar
from uuid import uuid4

import logfire
from redis.asyncio import Redis
from redis.exceptions import RedisError

from skylogin.domain.error import LockNotAcquiredError
from skylogin.domain.repository import RequestLock

T = TypeVar("T")

# Delete the lock only if it still holds our token. A holder whose lock
# expired must not remove a lock that another holder acquired since.
RELEASE_LOCK_SCRIPT = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
end
return 0
"""


class RedisRequestLock(RequestLock):
    """Distributed lock using Redis ``SET NX PX``.

    Every acquisition writes a random owner token with an expiry, so a
    crashed holder cannot block a key forever. A busy key is retried
    exactly once after ``retry_delay_seconds``; if it is still busy the
    call fails with LockNotAcquiredError and the caller treats it as a
    transient failure.
    """

    def __init__(
        self,
        client: Redis,
        prefix: str = "lock:",
        ttl_seconds: float = 30.0,
        retry_delay_seconds: float = 0.1,
    ) -> None:
        """Initialize lock.

        Args:
            client: Shared Redis client
            prefix: Namespace for lock keys, keeps them apart from session keys
            ttl_seconds: Lock expiry
            retry_delay_seconds: Delay before the single retry
        """
        self.client = client
        self.prefix = prefix
        self.ttl_seconds = ttl_seconds
        self.retry_delay_seconds = retry_delay_seconds
        self._release_script = client.register_script(RELEASE_LOCK_SCRIPT)

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    async def _try_acquire(self, name: str, token: str) -> bool:
        acquired = await self.client.set(
            name, token, nx=True, px=max(1, int(self.ttl_seconds * 1000))
        )
        return bool(acquired)

    async def with_lock(
        self, key: str, critical_section: Callable[[], Awaitable[T]]
    ) -> T:
        """Acquire ``key`` (one retry), run ``critical_section``, release."""
        name = self._key(key)
        token = uuid4().hex

        if not await self._try_acquire(name, token):
            await asyncio.sleep(self.retry_delay_seconds)
            if not await self._try_acquire(name, token):
                logfire.warn("Request lock contended", key=key)
                raise LockNotAcquiredError(key)

        try:
            result = await critical_section()
        except BaseException:
            # The section's error wins over a failed release; the entry expires
            try:
                await self._release(name, token, key)
            except (RedisError, OSError) as e:
                logfire.error(
                    "Request lock release failed",
                    key=key,
                    error=str(e),
                    error_type=type(e).__name__,
                )
            raise

        await self._release(name, token, key)
        return result

    async def _release(self, name: str, token: str, key: str) -> None:
        released = await self._release_script(keys=[name], args=[token])
        if not released:
            logfire.warn(
                "Request lock expired before release",
                key=key,
                ttl_seconds=self.ttl_seconds,
            )
