"""Shared base for identity value objects."""

from typing import Generic, TypeVar

from pydantic import ConfigDict, RootModel

T = TypeVar("T")


class RootValueObject(RootModel[T], Generic[T]):
    """Immutable wrapper around one validated primitive.

    Construct with the raw value (``Handle("alice.test")``) and read it
    back from ``.root``. Invalid input raises pydantic's ValidationError,
    which services translate into the domain ValidationError.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
