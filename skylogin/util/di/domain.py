"""Domain layer DI providers."""

from dishka import Scope, provide

from skylogin.adapter.atproto.oauth_client import OAuthClientStorage
from skylogin.domain.service import AuthorizationStateService, SessionService
from skylogin.persistence.storage import StorageContext
from skylogin.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Services are stateless handles over the shared storage, so they live
    for the whole application.
    """

    scope = Scope.APP

    @provide
    def get_authorization_state_service(
        self, storage: StorageContext
    ) -> AuthorizationStateService:
        """Provide authorization state domain service."""
        return AuthorizationStateService(state_store=storage.state_store)

    @provide
    def get_session_service(self, storage: StorageContext) -> SessionService:
        """Provide session domain service."""
        return SessionService(
            session_store=storage.session_store,
            request_lock=storage.request_lock,
        )

    @provide
    def get_oauth_client_storage(self, storage: StorageContext) -> OAuthClientStorage:
        """Provide the stores and lock handed to the OAuth client."""
        return OAuthClientStorage.from_storage(storage)
