"""Repository interfaces."""

from .lock import RequestLock
from .store import NOT_FOUND, JsonValue, KeyValueStore, Missing, StoredValue

__all__ = [
    "JsonValue",
    "KeyValueStore",
    "Missing",
    "NOT_FOUND",
    "RequestLock",
    "StoredValue",
]
