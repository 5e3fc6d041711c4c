"""Wiring between this service and the external AT Protocol OAuth client.

The OAuth client library performs the protocol work (PAR, DPoP, token
exchange and refresh). It is constructed with the client metadata below
and with the storage it persists into: a state store, a session store and
a request lock wrapped around token refreshes.
"""

from dataclasses import dataclass

from pydantic import BaseModel

from skylogin.adapter.error import ClientConfigurationError
from skylogin.config import Settings
from skylogin.domain.repository import KeyValueStore, RequestLock
from skylogin.persistence.storage import StorageContext


class OAuthClientMetadata(BaseModel):
    """OAuth client metadata document.

    Its URL is the client_id in AT Protocol OAuth flows.
    """

    client_id: str
    client_name: str
    client_uri: str
    redirect_uris: list[str]
    grant_types: list[str]
    response_types: list[str]
    scope: str
    token_endpoint_auth_method: str
    token_endpoint_auth_signing_alg: str | None = None
    application_type: str
    dpop_bound_access_tokens: bool
    jwks: dict | None = None


def build_client_metadata(settings: Settings) -> OAuthClientMetadata:
    """Build the client metadata served at /client-metadata.json.

    With a public JWK configured the client is confidential and signs its
    token requests (private_key_jwt, ES256); otherwise it is a public client.

    Raises:
        ClientConfigurationError: If the configured JWK is not a public EC key
    """
    base_url = settings.api.base_url
    public_jwk = settings.oauth.public_jwk

    if public_jwk is not None:
        if public_jwk.get("kty") != "EC":
            raise ClientConfigurationError("OAuth public JWK must be an EC key")
        if "d" in public_jwk:
            raise ClientConfigurationError(
                "OAuth public JWK contains private key material"
            )

    return OAuthClientMetadata(
        client_id=f"{base_url}/client-metadata.json",
        client_name=settings.oauth.client_name,
        client_uri=base_url,
        redirect_uris=[f"{base_url}/oauth/callback"],
        grant_types=["authorization_code", "refresh_token"],
        response_types=["code"],
        scope=settings.oauth.scope,
        token_endpoint_auth_method="private_key_jwt" if public_jwk else "none",
        token_endpoint_auth_signing_alg="ES256" if public_jwk else None,
        application_type="web",
        dpop_bound_access_tokens=True,  # REQUIRED by AT Protocol
        jwks={"keys": [public_jwk]} if public_jwk else None,
    )


@dataclass(frozen=True)
class OAuthClientStorage:
    """Storage handed to the OAuth client at construction time."""

    state_store: KeyValueStore
    session_store: KeyValueStore
    request_lock: RequestLock

    @classmethod
    def from_storage(cls, storage: StorageContext) -> "OAuthClientStorage":
        """Take the stores and lock of an initialized storage context.

        Raises:
            StorageNotInitializedError: If storage has not been initialized
        """
        return cls(
            state_store=storage.state_store,
            session_store=storage.session_store,
            request_lock=storage.request_lock,
        )
