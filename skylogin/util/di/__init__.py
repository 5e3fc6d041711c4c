"""Dependency injection providers and provider selection."""

from typing import Type

from skylogin.util.di.base import Component, ProviderBase
from skylogin.util.di.core import ProdConfigProvider
from skylogin.util.di.domain import ProdDomainProvider
from skylogin.util.di.infrastructure import ProdStorageProvider, StorageProvider
from skylogin.util.error import DependencyInjectionError

# Bases resolved into concrete providers when a container is built
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    StorageProvider,  # mockable: "storage"
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a provider base to the class to instantiate.

    A base without subclasses is concrete and returned unchanged. A base
    with subclasses is a mockable component; the subclass whose
    ``__is_mock__`` equals ``use_mock`` is returned. Mock subclasses only
    exist once test code has imported them.

    Raises:
        DependencyInjectionError: If no subclass of the requested kind exists
    """
    candidates = base.__subclasses__()
    if not candidates:
        return base

    for candidate in candidates:
        if getattr(candidate, "__is_mock__", False) == use_mock:
            return candidate

    kind = "mock" if use_mock else "production"
    component = getattr(base, "__mock_component__", None) or base.__name__
    raise DependencyInjectionError(f"No {kind} provider for component {component!r}")


__all__ = [
    "Component",
    "PROVIDERS",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdStorageProvider",
    "ProviderBase",
    "StorageProvider",
    "get_provider",
]
