"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting is overridable by an environment variable or the .env file
    - get_settings() is cached (lru_cache), one Settings per process
    - database_url always names an async driver

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - filter_param_key names the query-string root, so filter[name][op]=v can be
      renamed without touching routes
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_SYNC_TO_ASYNC_SCHEMES = {
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
}


class Settings(BaseSettings):
    """filterscope runtime settings."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    database_url: str = "postgresql+asyncpg://filterscope:filterscope@db:5432/filterscope"
    database_pool_size: int = Field(default=20, ge=1)
    database_max_overflow: int = Field(default=10, ge=0)

    filter_param_key: str = Field(default="filter", min_length=1)

    cors_origins: list[str] = ["http://localhost:5173"]

    log_level: str = "INFO"
    log_format: str = Field(default="json", pattern="^(json|text)$")

    @field_validator("database_url", mode="before")
    @classmethod
    def use_async_driver(cls, value: str) -> str:
        """Platform-issued postgres URLs name the sync driver."""
        if not isinstance(value, str):
            return value
        for sync_scheme, async_scheme in _SYNC_TO_ASYNC_SCHEMES.items():
            if value.startswith(sync_scheme):
                return async_scheme + value[len(sync_scheme):]
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
