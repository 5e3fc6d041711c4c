"""SQLite storage backend."""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from skylogin.config import StorageSettings
from skylogin.domain.repository import KeyValueStore, RequestLock
from skylogin.persistence import database
from skylogin.persistence.backend.base import StorageBackend
from skylogin.persistence.lock import LocalRequestLock
from skylogin.persistence.store import SqliteStore
from skylogin.persistence.tables import auth_session_table, auth_state_table
from skylogin.util.observability import instrument_sqlalchemy


class SqliteBackend(StorageBackend):
    """Single-file SQLite storage with an in-process request lock.

    Suitable for one app instance: the lock does not coordinate between
    processes.
    """

    name = "sqlite"

    def __init__(self, settings: StorageSettings, echo: bool = False) -> None:
        self.settings = settings
        self.echo = echo
        self._engine: AsyncEngine | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("SQLite backend is not connected")
        return self._engine

    async def connect(self) -> None:
        """Open the database file and create the tables."""
        engine = database.create_engine(self.settings.sqlite_path, echo=self.echo)
        try:
            await database.create_schema(engine)
        except Exception:
            await engine.dispose()
            raise
        instrument_sqlalchemy(engine)
        self._engine = engine
        logfire.info("SQLite storage ready", path=self.settings.sqlite_path)

    async def disconnect(self) -> None:
        """Dispose of the engine and its pooled connections."""
        if self._engine is not None:
            engine, self._engine = self._engine, None
            await engine.dispose()
            logfire.info("SQLite connection closed")

    async def ping(self) -> None:
        await database.ping(self.engine)

    def build_state_store(self) -> KeyValueStore:
        return SqliteStore(self.engine, auth_state_table)

    def build_session_store(self) -> KeyValueStore:
        return SqliteStore(self.engine, auth_session_table)

    def build_request_lock(self) -> RequestLock:
        return LocalRequestLock(timeout_seconds=self.settings.local_lock_timeout_seconds)
