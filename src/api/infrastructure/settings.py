"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        MARQUEE_DB_HOST: Database host (default: localhost)
        MARQUEE_DB_PORT: Database port (default: 5432)
        MARQUEE_DB_DATABASE: Database name (default: marquee)
        MARQUEE_DB_USERNAME: Database user (default: marquee)
        MARQUEE_DB_PASSWORD: Database password (required in production)
        MARQUEE_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        MARQUEE_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        MARQUEE_DB_CONNECT_TIMEOUT_SECONDS: Connection attempt timeout (default: 5)
        MARQUEE_DB_POOL_TIMEOUT_SECONDS: Wait for a free pooled connection
            (default: 5)
        MARQUEE_DB_STATEMENT_TIMEOUT_MS: Server-side statement timeout
            (default: 5000)
    """

    model_config = SettingsConfigDict(
        env_prefix="MARQUEE_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="marquee", description="Database name")
    username: str = Field(default="marquee", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    connect_timeout_seconds: float = Field(
        default=5.0,
        description="Connection attempt timeout",
        gt=0,
        le=60,
    )
    pool_timeout_seconds: float = Field(
        default=5.0,
        description="Wait for a free pooled connection",
        gt=0,
        le=60,
    )
    statement_timeout_ms: int = Field(
        default=5000,
        description="Server-side statement timeout in milliseconds",
        ge=100,
        le=600_000,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class SecuritySettings(BaseSettings):
    """Application-key encryption and authentication challenge settings.

    Environment variables:
        MARQUEE_SECURITY_ENCRYPTION_KEY: Hex-encoded 256-bit AES key used to
            encrypt application API keys at rest (64 hex characters)
        MARQUEE_SECURITY_REALM: Realm echoed in WWW-Authenticate challenges
            (default: marquee)
    """

    model_config = SettingsConfigDict(
        env_prefix="MARQUEE_SECURITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    encryption_key: SecretStr = Field(
        default=SecretStr(""),
        description="Hex-encoded 32-byte AES-256-GCM key",
    )
    realm: str = Field(default="marquee", description="Authentication realm")

    @field_validator("encryption_key")
    @classmethod
    def validate_encryption_key(cls, value: SecretStr) -> SecretStr:
        """Reject keys that do not hex-decode to exactly 32 bytes.

        An empty key is allowed so the service can boot for health checks;
        the key manager refuses to operate without one.
        """
        raw = value.get_secret_value()
        if not raw:
            return value
        try:
            decoded = bytes.fromhex(raw)
        except ValueError as e:
            raise ValueError("encryption_key must be hex encoded") from e
        if len(decoded) != 32:
            raise ValueError(
                f"encryption_key must decode to 32 bytes, got {len(decoded)}"
            )
        return value

    @property
    def encryption_key_bytes(self) -> bytes:
        """Decoded encryption key (empty when unset)."""
        return bytes.fromhex(self.encryption_key.get_secret_value())


class OAuth2Settings(BaseSettings):
    """Outbound OAuth2 provider settings.

    Environment variables:
        MARQUEE_OAUTH2_GOOGLE_USERINFO_URL: Google userinfo endpoint
        MARQUEE_OAUTH2_GOOGLE_TOKENINFO_URL: Google tokeninfo endpoint
        MARQUEE_OAUTH2_REQUEST_TIMEOUT_SECONDS: Timeout for provider calls
            (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="MARQUEE_OAUTH2_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    google_userinfo_url: str = Field(
        default="https://www.googleapis.com/oauth2/v2/userinfo",
        description="Google OAuth2 userinfo endpoint",
    )
    google_tokeninfo_url: str = Field(
        default="https://oauth2.googleapis.com/tokeninfo",
        description="Google OAuth2 tokeninfo endpoint",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for outbound provider requests",
        gt=0,
        le=120,
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Marquee API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def security(self) -> SecuritySettings:
        """Get security settings."""
        return get_security_settings()

    @property
    def oauth2(self) -> OAuth2Settings:
        """Get OAuth2 provider settings."""
        return get_oauth2_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_security_settings() -> SecuritySettings:
    """Get cached security settings."""
    return SecuritySettings()


@lru_cache
def get_oauth2_settings() -> OAuth2Settings:
    """Get cached OAuth2 provider settings."""
    return OAuth2Settings()
