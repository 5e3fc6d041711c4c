"""Authorization state record."""

from datetime import datetime, timezone
from typing import Any

from pydantic import Field

from skylogin.domain.model.common import RecordModel


class StateRecord(RecordModel):
    """In-flight authorization attempt, keyed by the OAuth state string.

    Created when login starts and deleted when the callback consumes it.
    Abandoned attempts are never cleaned up by this record itself.
    """

    handle: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    options: dict[str, Any] = Field(default_factory=dict)
