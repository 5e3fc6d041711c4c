"""Request lock implementations."""

from .local import LocalRequestLock
from .redis import RedisRequestLock

__all__ = ["LocalRequestLock", "RedisRequestLock"]
