"""Mock storage providers for testing."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from skylogin.config import StorageSettings
from skylogin.persistence.backend import SqliteBackend
from skylogin.persistence.storage import StorageContext
from skylogin.util.di.infrastructure.storage import StorageProvider


class MockStorageProvider(StorageProvider):
    """Mock storage provider using an in-memory SQLite database.

    Every container gets its own database, so tests are isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    async def get_storage(self) -> AsyncIterator[StorageContext]:
        """Provide initialized in-memory storage."""
        storage = StorageContext(SqliteBackend(StorageSettings(sqlite_path=":memory:")))
        await storage.initialize()
        yield storage
        await storage.close()
