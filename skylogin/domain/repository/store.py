"""Key-value store interface for OAuth state and session records."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Literal, TypeAlias


class Missing(Enum):
    """Marker type for absent keys."""

    NOT_FOUND = "not_found"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = Missing.NOT_FOUND

# Any JSON-compatible tree (dict, list, str, int, float, bool, None)
JsonValue: TypeAlias = Any

StoredValue: TypeAlias = JsonValue | Literal[Missing.NOT_FOUND]


class KeyValueStore(ABC):
    """Async key-value store holding JSON-compatible records.

    Defines the contract shared by the state store and the session store
    that are handed to the OAuth client. Implementations live in the
    persistence layer.

    Every operation may perform I/O. Driver errors propagate to the
    caller; only an absent key is reported as a value (``NOT_FOUND``).
    """

    @abstractmethod
    async def get(self, key: str) -> StoredValue:
        """Read a record.

        Args:
            key: Record key (state string or DID)

        Returns:
            The decoded value, or NOT_FOUND when the key is absent

        Raises:
            RecordSerializationError: If the stored value is not valid JSON
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: JsonValue) -> None:
        """Create or replace a record.

        Repeating the same call leaves the store unchanged.

        Args:
            key: Record key
            value: JSON-compatible value

        Raises:
            RecordSerializationError: If the value cannot be encoded as JSON
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete a record. Deleting an absent key is not an error.

        Args:
            key: Record key
        """
        pass
