"""Storage backend interface."""

from abc import ABC, abstractmethod
from typing import ClassVar

from skylogin.domain.repository import KeyValueStore, RequestLock


class StorageBackend(ABC):
    """Connection owner for one storage technology.

    A backend holds the single shared connection (engine or client) for
    the process and hands out thin store and lock objects bound to it.
    StorageContext drives the lifecycle; the build_* methods are only
    called while connected.
    """

    name: ClassVar[str]

    @abstractmethod
    async def connect(self) -> None:
        """Open the connection and prepare the schema if needed.

        Raises:
            StorageConnectionError: If the backend cannot be reached
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the connection."""
        pass

    @abstractmethod
    async def ping(self) -> None:
        """Cheap liveness probe; raises on failure."""
        pass

    @abstractmethod
    def build_state_store(self) -> KeyValueStore:
        """Store for in-flight authorization state."""
        pass

    @abstractmethod
    def build_session_store(self) -> KeyValueStore:
        """Store for user sessions."""
        pass

    @abstractmethod
    def build_request_lock(self) -> RequestLock:
        """Lock used to serialize token refreshes."""
        pass
