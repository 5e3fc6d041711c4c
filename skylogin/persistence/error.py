"""Persistence layer errors."""


class PersistenceError(Exception):
    """Base persistence error."""

    pass


class StorageNotInitializedError(PersistenceError):
    """Storage accessed before initialize() or after close()."""

    def __init__(self) -> None:
        super().__init__("Storage not initialized. Call initialize() first.")


class StorageConnectionError(PersistenceError):
    """Storage backend could not be reached during initialization."""

    pass


class RecordSerializationError(PersistenceError):
    """A record could not be encoded for storage or decoded after reading."""

    def __init__(self, key: str, reason: str):
        self.key = key
        super().__init__(f"Cannot serialize record {key!r}: {reason}")
