"""Unit tests for the Redis request lock."""

import asyncio
import time

import fakeredis
import pytest
import pytest_asyncio
from redis.exceptions import ConnectionError as RedisConnectionError

from skylogin.domain.error import LockNotAcquiredError
from skylogin.persistence.lock import RedisRequestLock


@pytest_asyncio.fixture
async def redis_client():
    """In-memory Redis client with its own server."""
    client = fakeredis.FakeAsyncRedis(
        server=fakeredis.FakeServer(), decode_responses=True
    )
    yield client
    await client.aclose()


class TestRedisRequestLock:
    """Tests for RedisRequestLock."""

    @pytest.mark.asyncio
    async def test_lock_key_is_prefixed_and_expires(self, redis_client):
        """The lock entry lives under lock:<key> with an expiry."""
        lock = RedisRequestLock(redis_client, ttl_seconds=30)
        observed = {}

        async def section():
            observed["value"] = await redis_client.get("lock:did:plc:abc")
            observed["pttl"] = await redis_client.pttl("lock:did:plc:abc")
            observed["session_key"] = await redis_client.exists("did:plc:abc")
            return "done"

        result = await lock.with_lock("did:plc:abc", section)

        assert result == "done"
        assert observed["value"]
        assert 0 < observed["pttl"] <= 30_000
        assert observed["session_key"] == 0
        assert await redis_client.exists("lock:did:plc:abc") == 0

    @pytest.mark.asyncio
    async def test_same_key_runs_sequentially(self, redis_client):
        """Second caller waits out a 50ms holder via the single retry."""
        # Arrange
        lock = RedisRequestLock(redis_client, retry_delay_seconds=0.1)
        running = 0
        max_running = 0

        async def section():
            nonlocal running, max_running
            running += 1
            max_running = max(max_running, running)
            await asyncio.sleep(0.05)
            running -= 1

        # Act
        started = time.monotonic()
        await asyncio.gather(
            lock.with_lock("did:plc:same", section),
            lock.with_lock("did:plc:same", section),
        )
        elapsed = time.monotonic() - started

        # Assert
        assert max_running == 1
        assert elapsed >= 0.09

    @pytest.mark.asyncio
    async def test_contention_after_retry_raises(self, redis_client):
        """A key still held after the retry fails with LockNotAcquiredError."""
        # Arrange
        lock = RedisRequestLock(redis_client, retry_delay_seconds=0.02)
        await redis_client.set("lock:did:plc:busy", "someone-else", px=30_000)
        calls = 0

        async def section():
            nonlocal calls
            calls += 1

        # Act / Assert
        with pytest.raises(LockNotAcquiredError) as exc_info:
            await lock.with_lock("did:plc:busy", section)

        assert exc_info.value.key == "did:plc:busy"
        assert calls == 0
        assert await redis_client.get("lock:did:plc:busy") == "someone-else"

    @pytest.mark.asyncio
    async def test_different_keys_overlap(self, redis_client):
        """Sections on different keys run concurrently."""
        lock = RedisRequestLock(redis_client)
        both_inside = asyncio.Event()
        inside = 0

        async def section():
            nonlocal inside
            inside += 1
            if inside == 2:
                both_inside.set()
            await asyncio.wait_for(both_inside.wait(), timeout=1)

        await asyncio.gather(
            lock.with_lock("did:plc:one", section),
            lock.with_lock("did:plc:two", section),
        )

        assert both_inside.is_set()

    @pytest.mark.asyncio
    async def test_released_when_section_raises(self, redis_client):
        """A failing section still removes its lock entry."""
        lock = RedisRequestLock(redis_client)

        async def failing():
            raise RuntimeError("refresh failed")

        with pytest.raises(RuntimeError, match="refresh failed"):
            await lock.with_lock("did:plc:x", failing)

        assert await redis_client.exists("lock:did:plc:x") == 0

    @pytest.mark.asyncio
    async def test_section_error_survives_failed_release(self):
        """Redis failing during release does not mask the section's error."""
        # Arrange
        server = fakeredis.FakeServer()
        client = fakeredis.FakeAsyncRedis(server=server, decode_responses=True)
        lock = RedisRequestLock(client)

        async def failing():
            server.connected = False
            raise RuntimeError("refresh failed")

        # Act / Assert
        try:
            with pytest.raises(RuntimeError, match="refresh failed"):
                await lock.with_lock("did:plc:x", failing)
        finally:
            server.connected = True
            await client.aclose()

    @pytest.mark.asyncio
    async def test_failed_release_after_success_is_raised(self):
        """Without a section error, the release failure reaches the caller."""
        server = fakeredis.FakeServer()
        client = fakeredis.FakeAsyncRedis(server=server, decode_responses=True)
        lock = RedisRequestLock(client)

        async def section():
            server.connected = False
            return "done"

        try:
            with pytest.raises(RedisConnectionError):
                await lock.with_lock("did:plc:x", section)
        finally:
            server.connected = True
            await client.aclose()

    @pytest.mark.asyncio
    async def test_release_keeps_lock_taken_over_by_another_holder(
        self, redis_client
    ):
        """A holder whose entry was replaced must not delete the new one."""
        lock = RedisRequestLock(redis_client)

        async def section():
            # Simulates expiry followed by acquisition elsewhere
            await redis_client.set("lock:did:plc:stale", "other-holder", px=30_000)

        await lock.with_lock("did:plc:stale", section)

        assert await redis_client.get("lock:did:plc:stale") == "other-holder"

    @pytest.mark.asyncio
    async def test_expired_lock_can_be_reacquired(self, redis_client):
        """After the TTL lapses a second caller gets the key."""
        # Arrange
        lock = RedisRequestLock(redis_client, ttl_seconds=0.05, retry_delay_seconds=0.01)
        first_inside = asyncio.Event()
        second_done = asyncio.Event()

        async def slow_holder():
            first_inside.set()
            await asyncio.wait_for(second_done.wait(), timeout=1)
            return "first"

        async def second_holder():
            second_done.set()
            return "second"

        # Act
        first = asyncio.create_task(lock.with_lock("did:plc:ttl", slow_holder))
        await first_inside.wait()
        await asyncio.sleep(0.1)
        second = await lock.with_lock("did:plc:ttl", second_holder)

        # Assert
        assert second == "second"
        assert await first == "first"
        assert await redis_client.exists("lock:did:plc:ttl") == 0

    @pytest.mark.asyncio
    async def test_callable_like_with_lock(self, redis_client):
        """The lock can be invoked directly, as an OAuth client expects."""
        lock = RedisRequestLock(redis_client)

        async def section():
            return 42

        assert await lock("did:plc:call", section) == 42
