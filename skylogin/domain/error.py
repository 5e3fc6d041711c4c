"""Errors raised by domain services and the storage contracts."""


class DomainError(Exception):
    """Base for errors a caller is expected to handle."""


class ValidationError(DomainError):
    """User input (for example a handle) was rejected."""


class NotFoundError(DomainError):
    """A state or session the caller referred to does not exist.

    Stores themselves report absence with NOT_FOUND; services raise this
    when absence means the request cannot proceed.
    """

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"No {resource.lower()} for {identifier}")


class LockNotAcquiredError(DomainError):
    """Raised when a request lock is still held by someone else.

    Contention is transient: the caller decides whether to retry or fail
    the request that triggered the locked operation.
    """

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Could not acquire lock for {key}")
