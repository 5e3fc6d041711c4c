"""Provider base class and mockable component names."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with both a production and a test provider
Component = Literal["storage"]


class ProviderBase(Provider):
    """Common base of every provider in the container.

    A mockable component is declared by a base provider that sets
    ``__mock_component__``; its production and mock subclasses are told
    apart by ``__is_mock__``. Providers without subclasses are used as-is.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
