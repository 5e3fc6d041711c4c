"""Redis implementation of the key-value store."""

from redis.asyncio import Redis

from skylogin.domain.repository import NOT_FOUND, JsonValue, KeyValueStore, StoredValue
from skylogin.persistence.codec import decode_value, encode_value


class RedisStore(KeyValueStore):
    """KeyValueStore backed by plain Redis string keys.

    Records are stored as ``<prefix><key>`` with their JSON text as value.
    No expiry is set unless ``ttl_seconds`` is given; otherwise entries
    live until deleted or evicted by the server's own policy.
    """

    def __init__(
        self, client: Redis, prefix: str = "", ttl_seconds: int | None = None
    ) -> None:
        """Initialize store.

        Args:
            client: Shared Redis client (decode_responses=True)
            prefix: Prefix applied to every key
            ttl_seconds: Expiry applied on every write, or None
        """
        self.client = client
        self.prefix = prefix
        self.ttl_seconds = ttl_seconds

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    async def get(self, key: str) -> StoredValue:
        """Read a record."""
        raw = await self.client.get(self._key(key))
        if raw is None:
            return NOT_FOUND
        return decode_value(key, raw)

    async def set(self, key: str, value: JsonValue) -> None:
        """Write a record, replacing any previous value."""
        await self.client.set(
            self._key(key), encode_value(key, value), ex=self.ttl_seconds
        )

    async def delete(self, key: str) -> None:
        """Delete a record if present."""
        await self.client.delete(self._key(key))
