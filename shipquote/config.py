"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache), one instance per process
    - Cache TTL and high-water mark are strictly positive

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults match the production quote policy: works out-of-the-box with no .env
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Quote cache
    cache_ttl_seconds: int = Field(300, gt=0)
    cache_max_entries: int = Field(1000, gt=0)

    # Business rules
    max_weight_oz: float = Field(1600.0, gt=0)

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("log_format")
    @classmethod
    def normalize_log_format(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @property
    def cache_ttl_ms(self) -> int:
        return self.cache_ttl_seconds * 1000


@lru_cache
def get_settings() -> Settings:
    return Settings()
