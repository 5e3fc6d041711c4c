"""User session record."""

from datetime import datetime, timedelta, timezone

from pydantic import Field, field_validator

from skylogin.domain.model.common import RecordModel


class TokenSet(RecordModel):
    """OAuth token material for one user."""

    access_token: str
    refresh_token: str | None = None
    expires_at: datetime | None = None

    @field_validator("expires_at")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        """Treat naive timestamps as UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    def expires_within(self, margin: timedelta, now: datetime | None = None) -> bool:
        """Whether the access token expires within ``margin`` from ``now``.

        Tokens without an expiry never need refreshing.
        """
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return self.expires_at - margin <= now


class SessionRecord(RecordModel):
    """Durable session keyed by the user's DID.

    Stored as ``{"sub": <did>, "tokenSet": {...}}``.
    """

    sub: str
    token_set: TokenSet = Field(alias="tokenSet")

    @property
    def did(self) -> str:
        return self.sub
