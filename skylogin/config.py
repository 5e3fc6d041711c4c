"""Settings loaded from the environment."""

import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import (
    BaseModel,
    PositiveFloat,
    PositiveInt,
    computed_field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

LOCAL_HOSTS = ("localhost", "127.0.0.1")
VERSION_FILE = Path("/app/version.txt")


class StorageSettings(BaseModel):
    """OAuth state/session storage configuration.

    The backend itself is selected by ``Settings.redis_url``: when it is set
    Redis is used, otherwise the SQLite file at ``sqlite_path``.
    """

    # SQLite file holding the auth_state and auth_session tables
    sqlite_path: str = "db.sqlite"

    # Redis key prefixes (empty keeps the flat key layout)
    state_prefix: str = ""
    session_prefix: str = ""

    # Optional Redis expiry for records, in seconds (None = no expiry)
    state_ttl_seconds: PositiveInt | None = None
    session_ttl_seconds: PositiveInt | None = None

    # Request lock
    lock_prefix: str = "lock:"
    lock_ttl_seconds: PositiveFloat = 30.0
    lock_retry_delay_seconds: float = 0.1
    # Only used by the in-process lock (None waits forever)
    local_lock_timeout_seconds: PositiveFloat | None = 30.0


class OAuthSettings(BaseModel):
    """AT Protocol OAuth client configuration."""

    client_name: str = "ATProto OAuth Example"
    scope: str = "atproto transition:generic"

    # Public ES256 JWK; when set the client authenticates with private_key_jwt
    public_jwk: dict[str, Any] | None = None


class ObservabilitySettings(BaseModel):
    """Where telemetry goes (OBSERVABILITY__* variables)."""

    # Without a token, events only reach the console
    logfire_token: str | None = None
    # Overrides the token-based default when set
    send_to_logfire: bool | None = None


class APISettings(BaseModel):
    """Derived public address of the server."""

    host: str
    port: int
    protocol: Literal["http", "https"]
    public_url: str | None = None

    @computed_field
    @property
    def base_url(self) -> str:
        """Origin used in client metadata and redirect URIs.

        PUBLIC_URL wins when set. Local hosts keep their port, other
        hosts are assumed to sit behind a proxy on the default port.
        """
        if self.public_url:
            return self.public_url.rstrip("/")
        if self.host in LOCAL_HOSTS:
            return f"{self.protocol}://{self.host}:{self.port}"
        return f"{self.protocol}://{self.host}"


class Settings(BaseSettings):
    """Process configuration, read from the environment and ``.env``.

    Local development needs nothing set: the server answers on
    http://localhost:8000 and keeps its records in ./db.sqlite.

    A deployment behind a proxy with shared storage sets, for example:

        ENVIRONMENT=production
        PUBLIC_URL=https://login.example.com
        REDIS_URL=redis://redis:6379/0
        STORAGE__SESSION_TTL_SECONDS=1209600
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    # Replaced by the contents of /app/version.txt in built images
    git_sha: str = "unknown"

    host: str = "localhost"
    port: int = 8000
    public_url: str | None = None

    # Selects the Redis backend when set
    redis_url: str | None = None

    storage: StorageSettings = StorageSettings()
    oauth: OAuthSettings = OAuthSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
    # Derived from host/port/public_url after validation
    api: APISettings = APISettings(host="localhost", port=8000, protocol="http")

    @field_validator("public_url")
    @classmethod
    def validate_public_url(cls, v: str | None) -> str | None:
        """Require an absolute http(s) URL."""
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError("PUBLIC_URL must start with http:// or https://")
        if v.startswith("http://") and not any(local in v for local in LOCAL_HOSTS):
            logger.warning(
                "PUBLIC_URL is using HTTP instead of HTTPS; this is insecure for production"
            )
        return v

    @field_validator("redis_url")
    @classmethod
    def blank_redis_url_is_unset(cls, v: str | None) -> str | None:
        """Treat REDIS_URL= (empty) the same as an unset variable."""
        return v or None

    @model_validator(mode="after")
    def derive_api_settings(self) -> "Settings":
        """Fill in ``api`` and ``git_sha`` from the validated fields."""
        local = self.environment in ("test", "development")
        self.api = APISettings(
            host=self.host,
            port=self.port,
            protocol="http" if local else "https",
            public_url=self.public_url,
        )
        self.git_sha = read_build_sha()
        return self

    @property
    def storage_backend(self) -> Literal["redis", "sqlite"]:
        """Name of the storage backend selected by this configuration."""
        return "redis" if self.redis_url else "sqlite"


def read_build_sha(path: Path = VERSION_FILE) -> str:
    """Commit SHA baked into the image, or "unknown" outside one."""
    try:
        return path.read_text().strip() or "unknown"
    except OSError:
        return "unknown"
