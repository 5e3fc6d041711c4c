"""Storage infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire

from skylogin.config import Settings
from skylogin.persistence.backend import RedisBackend, create_backend
from skylogin.persistence.storage import StorageContext
from skylogin.util.di.base import ProviderBase
from skylogin.util.observability import instrument_redis


class StorageProvider(ProviderBase):
    """Storage component base."""

    __mock_component__ = "storage"


class ProdStorageProvider(StorageProvider):
    """Production storage provider: Redis when REDIS_URL is set, else SQLite."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_storage(self, settings: Settings) -> AsyncIterator[StorageContext]:
        """Provide the initialized storage context.

        The backend is chosen once here. Connection failures propagate so
        the application does not start without its storage. The context
        is closed when the container closes.
        """
        backend = create_backend(settings)
        if isinstance(backend, RedisBackend):
            instrument_redis()

        storage = StorageContext(backend)
        await storage.initialize()
        try:
            yield storage
        finally:
            await storage.close()
            logfire.info("Storage closed", backend=storage.backend_name)
