"""Domain services."""

from .authorization_state_service import AuthorizationStateService
from .base import Service
from .session_service import SessionService, TokenRefresher

__all__ = [
    "AuthorizationStateService",
    "Service",
    "SessionService",
    "TokenRefresher",
]
