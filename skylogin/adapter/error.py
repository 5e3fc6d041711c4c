"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class ClientConfigurationError(AdapterError):
    """OAuth client configuration is invalid."""

    pass
