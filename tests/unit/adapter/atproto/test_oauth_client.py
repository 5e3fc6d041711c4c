"""Unit tests for OAuth client wiring."""

import pytest

from skylogin.adapter.atproto.oauth_client import (
    OAuthClientStorage,
    build_client_metadata,
)
from skylogin.adapter.error import ClientConfigurationError
from skylogin.config import OAuthSettings, Settings, StorageSettings
from skylogin.domain.repository import NOT_FOUND
from skylogin.persistence.backend import SqliteBackend
from skylogin.persistence.error import StorageNotInitializedError
from skylogin.persistence.storage import StorageContext
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

PUBLIC_JWK = {
    "kty": "EC",
    "crv": "P-256",
    "x": "f83OJ3D2xF1Bg8vub9tLe1gHMzV76e8Tus9uPHvRVEU",
    "y": "x_FEzRu9m36HLN_tue659LNpXW6pCyStikYjKIWI5a0",
    "kid": "key-1",
}


class TestBuildClientMetadata:
    """Tests for build_client_metadata."""

    def test_public_client_for_local_development(self):
        settings = Settings(environment="development")

        metadata = build_client_metadata(settings)

        assert metadata.client_id == "http://localhost:8000/client-metadata.json"
        assert metadata.redirect_uris == ["http://localhost:8000/oauth/callback"]
        assert metadata.grant_types == ["authorization_code", "refresh_token"]
        assert metadata.token_endpoint_auth_method == "none"
        assert metadata.token_endpoint_auth_signing_alg is None
        assert metadata.jwks is None
        assert metadata.dpop_bound_access_tokens is True

    def test_public_url_becomes_client_id(self):
        settings = Settings(
            environment="production", public_url="https://login.example.com"
        )

        metadata = build_client_metadata(settings)

        assert metadata.client_id == "https://login.example.com/client-metadata.json"
        assert metadata.client_uri == "https://login.example.com"

    def test_confidential_client_with_public_jwk(self):
        settings = Settings(oauth=OAuthSettings(public_jwk=PUBLIC_JWK))

        metadata = build_client_metadata(settings)

        assert metadata.token_endpoint_auth_method == "private_key_jwt"
        assert metadata.token_endpoint_auth_signing_alg == "ES256"
        assert metadata.jwks == {"keys": [PUBLIC_JWK]}

    def test_rejects_private_key_material(self):
        settings = Settings(oauth=OAuthSettings(public_jwk={**PUBLIC_JWK, "d": "secret"}))

        with pytest.raises(ClientConfigurationError):
            build_client_metadata(settings)

    def test_rejects_non_ec_key(self):
        settings = Settings(oauth=OAuthSettings(public_jwk={"kty": "RSA", "n": "x"}))

        with pytest.raises(ClientConfigurationError):
            build_client_metadata(settings)


class TestOAuthClientStorage:
    """Tests for OAuthClientStorage."""

    @pytest.mark.asyncio
    async def test_provides_initialized_stores_and_lock(self, unit_env):
        storage = await unit_env.get(StorageContext)

        client_storage = await unit_env.get(OAuthClientStorage)

        assert client_storage.state_store is storage.state_store
        assert client_storage.session_store is storage.session_store
        assert client_storage.request_lock is storage.request_lock

    @pytest.mark.asyncio
    async def test_handles_work_like_an_oauth_client_uses_them(self, unit_env):
        """State set/get/del and a refresh under the request lock."""
        client_storage = await unit_env.get(OAuthClientStorage)

        await client_storage.state_store.set("s1", {"handle": "alice.test"})
        assert await client_storage.state_store.get("s1") == {"handle": "alice.test"}
        await client_storage.state_store.delete("s1")
        assert await client_storage.state_store.get("s1") is NOT_FOUND

        async def refresh():
            await client_storage.session_store.set("did:plc:a", {"sub": "did:plc:a"})
            return "refreshed"

        assert await client_storage.request_lock("did:plc:a", refresh) == "refreshed"

    def test_from_uninitialized_storage_raises(self):
        storage = StorageContext(SqliteBackend(StorageSettings(sqlite_path=":memory:")))

        with pytest.raises(StorageNotInitializedError):
            OAuthClientStorage.from_storage(storage)
