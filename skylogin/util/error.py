"""Errors raised while wiring the application together."""


class UtilError(Exception):
    """Base for startup wiring failures."""


class ConfigurationError(UtilError):
    """Settings are present but unusable."""


class DependencyInjectionError(UtilError):
    """A container could not be assembled from the registered providers."""
