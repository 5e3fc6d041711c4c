"""Domain value objects."""

from skylogin.domain.value.types import Did, Handle

__all__ = ["Did", "Handle"]
