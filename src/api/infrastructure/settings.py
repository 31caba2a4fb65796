"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly,
in particular the JWT signing secret.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        INNOFOLIO_DB_HOST: Database host (default: localhost)
        INNOFOLIO_DB_PORT: Database port (default: 5432)
        INNOFOLIO_DB_DATABASE: Database name (default: innofolio)
        INNOFOLIO_DB_USERNAME: Database user (default: innofolio)
        INNOFOLIO_DB_PASSWORD: Database password (required in production)
        INNOFOLIO_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        INNOFOLIO_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        INNOFOLIO_DB_ECHO: Log emitted SQL statements (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="INNOFOLIO_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="innofolio", description="Database name")
    username: str = Field(default="innofolio", description="Database username")
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
    echo: bool = Field(default=False, description="Log SQL statements")

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


class AuthSettings(BaseSettings):
    """Token and credential settings.

    Environment variables:
        INNOFOLIO_AUTH_JWT_SECRET: HMAC secret used to sign bearer tokens
        INNOFOLIO_AUTH_JWT_ALGORITHM: Signing algorithm (default: HS256)
        INNOFOLIO_AUTH_TOKEN_TTL_DAYS: Bearer token lifetime (default: 7)
        INNOFOLIO_AUTH_PASSWORD_RESET_TTL_MINUTES: Reset token lifetime (default: 60)
    """

    model_config = SettingsConfigDict(
        env_prefix="INNOFOLIO_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    jwt_secret: SecretStr = Field(
        default=SecretStr("innofolio-development-secret"),
        description="Secret used to sign bearer tokens",
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    token_ttl_days: int = Field(
        default=7,
        description="Lifetime of issued bearer tokens in days",
        ge=1,
    )
    password_reset_ttl_minutes: int = Field(
        default=60,
        description="Lifetime of password reset tokens in minutes",
        ge=1,
    )


class EmailSettings(BaseSettings):
    """Outgoing notification settings.

    Environment variables:
        INNOFOLIO_EMAIL_SENDER: From address (default: noreply@innofolio.com)
        INNOFOLIO_EMAIL_RESET_URL_BASE: Frontend page receiving reset tokens
        INNOFOLIO_EMAIL_APP_URL: Frontend base URL linked from invitations
    """

    model_config = SettingsConfigDict(
        env_prefix="INNOFOLIO_EMAIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    sender: str = Field(default="noreply@innofolio.com", description="From address")
    reset_url_base: str = Field(
        default="http://localhost:5173/reset-password",
        description="Password reset page; the token is appended as a query parameter",
    )
    app_url: str = Field(
        default="http://localhost:5173",
        description="Frontend base URL",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="INNOFOLIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Innofolio API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:8081"],
        description="Origins allowed to call the API from a browser",
    )

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def auth(self) -> AuthSettings:
        """Get auth settings."""
        return get_auth_settings()

    @property
    def email(self) -> EmailSettings:
        """Get email settings."""
        return get_email_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings."""
    return DatabaseSettings()


@lru_cache
def get_auth_settings() -> AuthSettings:
    """Get cached auth settings."""
    return AuthSettings()


@lru_cache
def get_email_settings() -> EmailSettings:
    """Get cached email settings."""
    return EmailSettings()
