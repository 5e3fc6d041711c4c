"""Stored record models."""

from skylogin.domain.model.session import SessionRecord, TokenSet
from skylogin.domain.model.state import StateRecord

__all__ = ["SessionRecord", "StateRecord", "TokenSet"]
