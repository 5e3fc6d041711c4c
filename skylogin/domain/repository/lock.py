"""Request lock interface."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TypeVar

T = TypeVar("T")


class RequestLock(ABC):
    """Keyed mutual exclusion used to serialize token refreshes.

    At most one ``critical_section`` runs at a time for a given key among
    all users of the same lock namespace. Different keys never block each
    other.

    Instances are callable with the same signature as ``with_lock`` so
    they can be passed directly to an OAuth client as its request lock.
    """

    @abstractmethod
    async def with_lock(
        self, key: str, critical_section: Callable[[], Awaitable[T]]
    ) -> T:
        """Run ``critical_section`` while holding the lock for ``key``.

        Args:
            key: Lock key (usually the user's DID)
            critical_section: Coroutine function to run under the lock

        Returns:
            Whatever ``critical_section`` returns

        Raises:
            LockNotAcquiredError: If the lock could not be acquired
        """
        pass

    async def __call__(
        self, key: str, critical_section: Callable[[], Awaitable[T]]
    ) -> T:
        return await self.with_lock(key, critical_section)
