"""Authorization state domain service."""

import secrets
from typing import Any

import logfire
from pydantic import ValidationError as PydanticValidationError

from skylogin.domain.error import NotFoundError, ValidationError
from skylogin.domain.model import StateRecord
from skylogin.domain.repository import NOT_FOUND, KeyValueStore
from skylogin.domain.value import Handle

from .base import Service


class AuthorizationStateService(Service):
    """Tracks in-flight authorization attempts in the state store."""

    def __init__(self, state_store: KeyValueStore) -> None:
        """Initialize authorization state service.

        Args:
            state_store: Store keyed by OAuth state string
        """
        self.state_store = state_store

    async def begin(self, handle: str, options: dict[str, Any] | None = None) -> str:
        """Record a new authorization attempt.

        Args:
            handle: Handle the user is logging in with
            options: Authorization request options (scope, etc.)

        Returns:
            Fresh opaque state string

        Raises:
            ValidationError: If the handle is empty or malformed
        """
        try:
            valid_handle = Handle(handle)
        except PydanticValidationError as e:
            raise ValidationError(e.errors()[0]["msg"]) from e

        state = secrets.token_urlsafe(24)
        record = StateRecord(handle=valid_handle.root, options=options or {})
        await self.state_store.set(state, record.to_store())
        logfire.info("Authorization started", handle=valid_handle.root)
        return state

    async def consume(self, state: str) -> StateRecord:
        """Load and delete the record for a callback's state.

        Args:
            state: State string returned to the callback

        Returns:
            The stored authorization attempt

        Raises:
            NotFoundError: If the state is unknown or already consumed
        """
        raw = await self.state_store.get(state)
        if raw is NOT_FOUND:
            raise NotFoundError("Authorization state", state)
        await self.state_store.delete(state)
        return StateRecord.model_validate(raw)

    async def discard(self, state: str) -> None:
        """Drop an abandoned authorization attempt."""
        await self.state_store.delete(state)
