"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="KlassMata API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Database
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/klassmata",
        description="PostgreSQL connection URL with asyncpg driver",
    )

    # JWT sessions
    jwt_secret_key: str = Field(
        default="CHANGE-ME-IN-PRODUCTION",
        description="Secret key for signing session tokens",
    )
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_minutes: int = Field(default=60 * 24)
    session_cookie_name: str = Field(
        default="session_token",
        description="Cookie holding the session token for page requests",
    )

    # Access control redirect targets
    login_path: str = Field(default="/auth/signin")
    unauthorized_path: str = Field(default="/unauthorized")

    # Teacher invites
    invite_expiry_days: int = Field(default=7)
    invite_code_length: int = Field(default=10, ge=10)
    min_password_length: int = Field(default=8)
    bcrypt_rounds: int = Field(default=10)
    public_app_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the web app, used to build onboarding links",
    )

    # Mail delivery (Resend HTTP API)
    resend_api_key: str = Field(
        default="",
        description="Resend API key; mail delivery is disabled when empty",
    )
    resend_api_url: str = Field(default="https://api.resend.com/emails")
    mail_from: str = Field(default="KlassMata <onboarding@resend.dev>")
    mail_timeout_seconds: float = Field(
        default=10.0,
        description="Upper bound on a single mail dispatch",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """Ensure the database URL uses the asyncpg driver scheme.

        Render and other providers supply a standard ``postgresql://`` URL.
        SQLAlchemy's async engine requires ``postgresql+asyncpg://``.
        """
        url = self.database_url
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable/disable rate limiting (disable for tests)",
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma-separated list of allowed origins",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
