"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - jwt_secret has no default: the process refuses to start without one
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tasklist.core.access_policy import TaskAccessMode


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://tasks:tasks@db:5432/tasks"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    # create tables on startup instead of running alembic (local sqlite only)
    database_auto_create: bool = False

    # Tokens
    # HS256 keys below 32 bytes are rejected as too weak by PyJWT
    jwt_secret: SecretStr = Field(min_length=32)
    jwt_algorithm: str = "HS256"
    token_ttl_seconds: int = Field(3600, gt=0)

    # Credentials
    password_hash_rounds: int = Field(12, ge=4, le=31)

    # Cache
    cache_ttl_seconds: float = Field(600, gt=0)
    cache_sweep_interval_seconds: float = Field(60, ge=0)  # 0 disables the sweep

    # Access
    task_access_mode: TaskAccessMode = TaskAccessMode.REFERENCE

    # API
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
