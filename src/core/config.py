from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment."""

    app_name: str = Field(default="OJT Tracker API", validation_alias="APP_NAME")
    environment: str = Field(default="local", validation_alias="APP_ENV")
    version: str = Field(default="0.1.0")
    jwt_secret: str = Field(default="replace-with-secure-secret", validation_alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256")
    access_token_ttl_seconds: int = Field(default=3600)
    allowed_roles: tuple[str, ...] = Field(
        default=("student", "coordinator", "supervisor", "admin"),
        validation_alias="ALLOWED_ROLES",
    )
    database_url: str = Field(
        default="sqlite+aiosqlite:///./ojt_tracker.db",
        validation_alias="DATABASE_URL",
    )

    # Record store
    storage_backend: str = Field(default="sql", validation_alias="STORAGE_BACKEND")
    storage_quota_bytes: int | None = Field(default=None, validation_alias="STORAGE_QUOTA_BYTES")
    partition_prefix: str = Field(default="ojt_db_", validation_alias="PARTITION_PREFIX")
    simulated_latency_ms: int = Field(default=0, validation_alias="SIMULATED_LATENCY_MS")
    seed_on_startup: bool = Field(default=True, validation_alias="SEED_ON_STARTUP")

    # OJT program rules
    required_hours: int = Field(default=486, validation_alias="REQUIRED_HOURS")
    assigned_students_limit: int = Field(default=3, validation_alias="ASSIGNED_STUDENTS_LIMIT")

    @property
    def async_database_url(self) -> str:
        """Convert database URL to an async driver URL."""
        url = self.database_url
        if url.startswith("sqlite://"):
            url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        elif url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        return url

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="allow")


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()
