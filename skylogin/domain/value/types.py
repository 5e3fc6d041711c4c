"""Domain value objects for AT Protocol identities."""

import re

from pydantic import field_validator

from skylogin.domain.value.common import RootValueObject

HANDLE_PATTERN = re.compile(r"^[a-zA-Z0-9.-]+$")


class Handle(RootValueObject[str]):
    """AT Protocol handle, e.g. alice.bsky.social.

    Only letters, digits, dots and hyphens; a leading '@' is stripped.
    """

    @field_validator("root", mode="before")
    @classmethod
    def normalize_handle(cls, v: object) -> object:
        """Strip surrounding whitespace and a leading '@'."""
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("@"):
                v = v[1:]
        return v

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle is non-empty and uses the allowed characters."""
        if not v:
            raise ValueError("Handle required")
        if len(v) > 253 or not HANDLE_PATTERN.match(v):
            raise ValueError("Invalid handle format")
        return v


class Did(RootValueObject[str]):
    """Decentralized identifier, the stable key of a user's session.

    Format: did:plc:<identifier> or did:web:<domain>
    """

    @field_validator("root")
    @classmethod
    def validate_did_format(cls, v: str) -> str:
        """Validate DID starts with 'did:'."""
        if not v.startswith("did:"):
            raise ValueError("DID must start with 'did:'")
        if len(v) > 2048:
            raise ValueError("DID must be at most 2048 characters")
        return v
