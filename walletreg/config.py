"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Service
    service_name: str = "walletreg-api"
    service_version: str = "0.1.0"
    host: str = "0.0.0.0"
    port: int = 8080

    # Database
    database_url: str = (
        "postgresql+asyncpg://walletreg:walletreg@db:5432/walletreg"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Registration
    registration_timeout_seconds: float = 10.0

    # API
    cors_origins: list[str] = ["*"]
    cors_methods: list[str] = ["GET", "POST"]
    cors_headers: list[str] = ["content-type", "x-request-id"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def bind_address(self) -> str:
        return f"{self.host}:{self.port}"


@lru_cache
def get_settings() -> Settings:
    return Settings()
