"""Session domain service."""

from collections.abc import Awaitable, Callable
from datetime import timedelta

import logfire
from pydantic import ValidationError as PydanticValidationError

from skylogin.domain.error import NotFoundError, ValidationError
from skylogin.domain.model import SessionRecord, TokenSet
from skylogin.domain.repository import NOT_FOUND, KeyValueStore, RequestLock
from skylogin.domain.value import Did

from .base import Service

# Exchanges the session's refresh token for a new token set. Supplied by
# the OAuth client; the token endpoint call itself lives there.
TokenRefresher = Callable[[SessionRecord], Awaitable[TokenSet]]

DEFAULT_REFRESH_MARGIN = timedelta(seconds=60)


def parse_did(did: str) -> str:
    """Validate a DID used as a session key.

    Raises:
        ValidationError: If the value is not a DID
    """
    try:
        return Did(did).root
    except PydanticValidationError as e:
        raise ValidationError(e.errors()[0]["msg"]) from e


class SessionService(Service):
    """Domain service for stored OAuth sessions.

    Every read-modify-write of a session runs under the request lock for
    the session's DID, so two requests for the same user never refresh and
    persist tokens concurrently.
    """

    def __init__(
        self,
        session_store: KeyValueStore,
        request_lock: RequestLock,
        refresh_margin: timedelta = DEFAULT_REFRESH_MARGIN,
    ) -> None:
        """Initialize session service.

        Args:
            session_store: Store keyed by DID
            request_lock: Lock serializing refreshes per DID
            refresh_margin: Refresh tokens expiring within this window
        """
        self.session_store = session_store
        self.request_lock = request_lock
        self.refresh_margin = refresh_margin

    async def save(self, session: SessionRecord) -> None:
        """Persist a session under its DID."""
        await self.session_store.set(parse_did(session.did), session.to_store())

    async def get(self, did: str) -> SessionRecord | None:
        """Load a session without locking or refreshing."""
        raw = await self.session_store.get(parse_did(did))
        if raw is NOT_FOUND:
            return None
        return SessionRecord.model_validate(raw)

    async def restore(self, did: str, refresh: TokenRefresher) -> SessionRecord:
        """Load a session, refreshing its tokens first if they are about to expire.

        Args:
            did: User's DID
            refresh: Callback returning a new token set for the session

        Returns:
            A session whose access token is valid for at least the margin

        Raises:
            NotFoundError: If there is no session for the DID
            ValidationError: If ``did`` is not a DID
            LockNotAcquiredError: If another refresh holds the lock
        """
        did = parse_did(did)

        async def _restore() -> SessionRecord:
            session = await self.get(did)
            if session is None:
                raise NotFoundError("Session", did)
            if not session.token_set.expires_within(self.refresh_margin):
                return session

            with logfire.span("session_service.refresh", did=did):
                token_set = await refresh(session)
                refreshed = session.model_copy(update={"token_set": token_set})
                await self.save(refreshed)
            return refreshed

        return await self.request_lock.with_lock(did, _restore)

    async def revoke(self, did: str) -> None:
        """Delete a session, waiting for any refresh in progress."""
        did = parse_did(did)

        async def _revoke() -> None:
            await self.session_store.delete(did)

        await self.request_lock.with_lock(did, _revoke)
        logfire.info("Session revoked", did=did)
