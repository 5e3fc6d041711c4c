"""Redis storage backend."""

from collections.abc import Callable
from typing import Any

import logfire
from redis.asyncio import Redis
from redis.exceptions import RedisError

from skylogin.config import StorageSettings
from skylogin.domain.repository import KeyValueStore, RequestLock
from skylogin.persistence.backend.base import StorageBackend
from skylogin.persistence.error import StorageConnectionError
from skylogin.persistence.lock import RedisRequestLock
from skylogin.persistence.store import RedisStore

RedisClientFactory = Callable[..., Redis]


class RedisBackend(StorageBackend):
    """Redis storage shared by every app instance, with a distributed lock."""

    name = "redis"

    def __init__(
        self,
        url: str,
        settings: StorageSettings,
        client_factory: RedisClientFactory = Redis.from_url,
        **client_options: Any,
    ) -> None:
        """Initialize backend.

        Args:
            url: Redis connection URL (REDIS_URL)
            settings: Storage settings
            client_factory: Builds the client from the URL; tests substitute
                an in-memory server here
            client_options: Extra keyword arguments for the client factory
        """
        self.url = url
        self.settings = settings
        self.client_factory = client_factory
        self.client_options = client_options
        self._client: Redis | None = None

    @property
    def client(self) -> Redis:
        if self._client is None:
            raise RuntimeError("Redis backend is not connected")
        return self._client

    async def connect(self) -> None:
        """Create the client and verify the server answers PING.

        Raises:
            StorageConnectionError: If Redis is unreachable
        """
        client = self.client_factory(
            self.url, decode_responses=True, **self.client_options
        )
        try:
            await client.ping()
        except (RedisError, OSError) as e:
            await client.aclose()
            logfire.error("Failed to connect to Redis", error=str(e))
            raise StorageConnectionError(f"Redis connection failed: {e}") from e
        self._client = client
        logfire.info("Redis connected successfully")

    async def disconnect(self) -> None:
        """Close the client connection pool."""
        if self._client is not None:
            client, self._client = self._client, None
            await client.aclose()
            logfire.info("Redis connection closed")

    async def ping(self) -> None:
        await self.client.ping()

    def build_state_store(self) -> KeyValueStore:
        return RedisStore(
            self.client,
            prefix=self.settings.state_prefix,
            ttl_seconds=self.settings.state_ttl_seconds,
        )

    def build_session_store(self) -> KeyValueStore:
        return RedisStore(
            self.client,
            prefix=self.settings.session_prefix,
            ttl_seconds=self.settings.session_ttl_seconds,
        )

    def build_request_lock(self) -> RequestLock:
        return RedisRequestLock(
            self.client,
            prefix=self.settings.lock_prefix,
            ttl_seconds=self.settings.lock_ttl_seconds,
            retry_delay_seconds=self.settings.lock_retry_delay_seconds,
        )
