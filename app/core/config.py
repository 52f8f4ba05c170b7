"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (JWT_SECRET) are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Hard upper bound for page sizes; MAX_PAGE_SIZE may only lower it
PAGE_SIZE_LIMIT = 100


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except jwt_secret, which is
    validated in validate_required.
    """

    # App
    app_name: str = "exam-calendar-api"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (postgresql+asyncpg://... in production)
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Token verification (tokens are issued by the external auth provider)
    jwt_secret: SecretStr = SecretStr("")
    jwt_algorithm: str = "HS256"
    # Expected issuer; when empty and supabase_url is set, "<supabase_url>/auth/v1" is used.
    jwt_issuer: str | None = None
    supabase_url: str | None = None
    api_key_header: str = "apikey"

    # Pagination
    default_page_size: int = 20
    max_page_size: int = 100

    # In-process query cache tiers (capacity = max entries, ttl in seconds)
    cache_short_capacity: int = 500
    cache_short_ttl: int = 300
    cache_medium_capacity: int = 1000
    cache_medium_ttl: int = 600
    cache_long_capacity: int = 100
    cache_long_ttl: int = 1800
    cache_invalidate_on_write: bool = True

    # Full-text search configuration name (PostgreSQL regconfig)
    fulltext_config: str = "spanish"

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:3001"

    # Request / middleware
    request_id_header: str = "X-Request-ID"
    write_rate_limit: str = "120/minute"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required secrets and numeric bounds."""
        if not self.jwt_secret.get_secret_value():
            raise ValueError(
                "JWT_SECRET is required (the auth provider's JWT signing secret). "
                "Set in environment or .env file."
            )
        if not 1 <= self.max_page_size <= PAGE_SIZE_LIMIT:
            raise ValueError(f"MAX_PAGE_SIZE must be between 1 and {PAGE_SIZE_LIMIT}")
        if not 1 <= self.default_page_size <= self.max_page_size:
            raise ValueError("DEFAULT_PAGE_SIZE must be between 1 and MAX_PAGE_SIZE")
        return self

    @property
    def expected_issuer(self) -> str | None:
        """Issuer tokens must carry when they carry one (None disables the check)."""
        if self.jwt_issuer:
            return self.jwt_issuer
        if self.supabase_url:
            return f"{self.supabase_url.rstrip('/')}/auth/v1"
        return None


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
