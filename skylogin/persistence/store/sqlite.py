"""SQLite implementation of the key-value store."""

from sqlalchemy import Table, delete, select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.ext.asyncio import AsyncEngine

from skylogin.domain.repository import NOT_FOUND, JsonValue, KeyValueStore, StoredValue
from skylogin.persistence.codec import decode_value, encode_value


class SqliteStore(KeyValueStore):
    """KeyValueStore backed by one SQLite table.

    The table has a ``key`` primary key and a ``value`` column holding the
    JSON text of the record. Writes are upserts on the primary key.
    """

    def __init__(self, engine: AsyncEngine, table: Table) -> None:
        """Initialize store.

        Args:
            engine: Shared async engine of the SQLite backend
            table: auth_state_table or auth_session_table
        """
        self.engine = engine
        self.table = table

    async def get(self, key: str) -> StoredValue:
        """Read a record by primary key."""
        stmt = select(self.table.c["value"]).where(self.table.c["key"] == key)
        async with self.engine.connect() as conn:
            result = await conn.execute(stmt)
            raw = result.scalar_one_or_none()
        if raw is None:
            return NOT_FOUND
        return decode_value(key, raw)

    async def set(self, key: str, value: JsonValue) -> None:
        """Insert or replace a record."""
        raw = encode_value(key, value)
        stmt = (
            insert(self.table)
            .values(key=key, value=raw)
            .on_conflict_do_update(
                index_elements=[self.table.c["key"]], set_={"value": raw}
            )
        )
        async with self.engine.begin() as conn:
            await conn.execute(stmt)

    async def delete(self, key: str) -> None:
        """Delete a record if present."""
        stmt = delete(self.table).where(self.table.c["key"] == key)
        async with self.engine.begin() as conn:
            await conn.execute(stmt)
