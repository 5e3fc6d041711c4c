"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the record-level logic built on top of the
    key-value stores and the request lock.
    """

    pass
