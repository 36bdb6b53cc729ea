"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - CORS_ORIGIN is mandatory; DATABASE_URL or NEON_API_KEY must be present
    - Settings() raises on a missing mandatory value (fail fast before serving traffic)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Pool size derived from ENVIRONMENT unless DATABASE_POOL_SIZE overrides it
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Database
    database_url: str | None = None
    neon_api_key: str | None = None
    neon_project_id: str | None = None
    neon_api_base_url: str = "https://api.neon.tech/v1"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str | None) -> str | None:
        """Hosting providers hand out postgres:// URLs; the pool needs postgresql+asyncpg://."""
        if not isinstance(v, str) or not v.strip():
            return None
        for prefix in ("postgres://", "postgresql://"):
            if v.startswith(prefix):
                return "postgresql+asyncpg://" + v[len(prefix):]
        return v

    database_pool_size: int | None = None
    database_pool_timeout: float = 10.0
    database_statement_timeout_ms: int | None = 30_000
    database_connect_retries: int = 3
    database_connect_retry_delay: float = 1.0
    database_connect_retry_backoff: float = 1.0

    # HTTP
    cors_origin: str
    host: str = "0.0.0.0"
    port: int = 3000
    environment: str = "development"
    max_body_bytes: int = 10 * 1024

    # Rate limiting
    rate_limit_window_seconds: float = 15 * 60
    rate_limit_max_requests: int = 100
    rate_limit_submit_max_requests: int = 50

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @model_validator(mode="after")
    def require_database_source(self) -> "Settings":
        if not self.database_url and not self.neon_api_key:
            raise ValueError(
                "Either DATABASE_URL or NEON_API_KEY must be provided",
            )
        if not self.database_url and not self.neon_project_id:
            raise ValueError("NEON_PROJECT_ID is required with NEON_API_KEY")
        return self

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def pool_size(self) -> int:
        if self.database_pool_size is not None:
            return self.database_pool_size
        return 20 if self.is_production else 10


@lru_cache
def get_settings() -> Settings:
    return Settings()
