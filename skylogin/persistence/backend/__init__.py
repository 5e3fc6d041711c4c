"""Storage backends and the startup-time backend factory."""

from skylogin.config import Settings
from skylogin.util.error import ConfigurationError

from .base import StorageBackend
from .redis import RedisBackend
from .sqlite import SqliteBackend

REDIS_URL_SCHEMES = ("redis://", "rediss://", "unix://")


def create_backend(settings: Settings) -> StorageBackend:
    """Select the storage backend for this process.

    REDIS_URL selects Redis; without it the SQLite file backend is used.
    Called once at startup; the choice is fixed for the process lifetime.

    Args:
        settings: Application settings

    Returns:
        Unconnected storage backend

    Raises:
        ConfigurationError: If REDIS_URL is not a Redis URL
    """
    if settings.redis_url:
        if not settings.redis_url.startswith(REDIS_URL_SCHEMES):
            raise ConfigurationError(
                f"REDIS_URL must start with one of {', '.join(REDIS_URL_SCHEMES)}"
            )
        return RedisBackend(settings.redis_url, settings.storage)
    return SqliteBackend(settings.storage, echo=settings.debug)


__all__ = ["RedisBackend", "SqliteBackend", "StorageBackend", "create_backend"]
