"""Storage lifecycle: initialization, accessors, health check and teardown.

A StorageContext owns one backend for the lifetime of the process. It is
created by the DI container at startup and shared by everything that
needs the OAuth state store, the session store or the request lock.
"""

import asyncio
from enum import Enum

import logfire

from skylogin.domain.repository import KeyValueStore, RequestLock
from skylogin.persistence.backend import StorageBackend
from skylogin.persistence.error import StorageNotInitializedError


class StorageState(str, Enum):
    """Lifecycle state of a StorageContext."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    CLOSED = "closed"


class StorageContext:
    """Lifecycle manager for the storage backend.

    UNINITIALIZED -> INITIALIZED -> CLOSED. A closed context can be
    initialized again. The store and lock accessors raise
    StorageNotInitializedError in any state other than INITIALIZED.

    Attributes:
        backend: Storage backend selected at startup
        state: Current lifecycle state
    """

    def __init__(self, backend: StorageBackend) -> None:
        """Initialize context.

        Args:
            backend: Unconnected storage backend (see create_backend)
        """
        self.backend = backend
        self.state = StorageState.UNINITIALIZED
        # Serializes initialize/close so concurrent callers share one connection
        self._lifecycle_lock = asyncio.Lock()
        self._state_store: KeyValueStore | None = None
        self._session_store: KeyValueStore | None = None
        self._request_lock: RequestLock | None = None

    @property
    def backend_name(self) -> str:
        return self.backend.name

    @property
    def is_initialized(self) -> bool:
        return self.state is StorageState.INITIALIZED

    async def initialize(self) -> None:
        """Connect the backend and build the stores and lock.

        Does nothing when already initialized. Concurrent calls wait for
        the first one and connect only once.

        Raises:
            StorageConnectionError: If the backend cannot be reached
        """
        async with self._lifecycle_lock:
            if self.is_initialized:
                return

            with logfire.span("storage.initialize", backend=self.backend_name):
                await self.backend.connect()
                self._state_store = self.backend.build_state_store()
                self._session_store = self.backend.build_session_store()
                self._request_lock = self.backend.build_request_lock()
                self.state = StorageState.INITIALIZED

        logfire.info("Storage initialized", backend=self.backend_name)

    async def close(self) -> None:
        """Disconnect the backend. Does nothing unless initialized.

        The accessors fail again afterwards, even if disconnecting raised.
        """
        async with self._lifecycle_lock:
            if not self.is_initialized:
                return

            try:
                await self.backend.disconnect()
            finally:
                self.state = StorageState.CLOSED
                self._state_store = None
                self._session_store = None
                self._request_lock = None

    async def health_check(self) -> bool:
        """Probe the backend.

        Never raises: any failure is logged and reported as unhealthy.

        Returns:
            True if initialized and the backend answered the probe
        """
        if not self.is_initialized:
            return False

        try:
            await self.backend.ping()
            return True
        except Exception as e:
            logfire.error(
                "Storage health check failed",
                backend=self.backend_name,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

    @property
    def state_store(self) -> KeyValueStore:
        """Store for in-flight authorization state, keyed by state string."""
        if self._state_store is None:
            raise StorageNotInitializedError()
        return self._state_store

    @property
    def session_store(self) -> KeyValueStore:
        """Store for user sessions, keyed by DID."""
        if self._session_store is None:
            raise StorageNotInitializedError()
        return self._session_store

    @property
    def request_lock(self) -> RequestLock:
        """Lock serializing token refreshes per DID."""
        if self._request_lock is None:
            raise StorageNotInitializedError()
        return self._request_lock
