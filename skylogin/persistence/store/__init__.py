"""Key-value store implementations."""

from .redis import RedisStore
from .sqlite import SqliteStore

__all__ = ["RedisStore", "SqliteStore"]
