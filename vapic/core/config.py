"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Cache options are validated at load time and turned
into an immutable CacheOptions by to_cache_options().
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vapic.core.app_version import resolve_app_version
from vapic.core.constants import DEFAULT_CACHE_PREFIX, DEFAULT_PERMITTED_AGE
from vapic.core.options import CacheOptions
from vapic.domain.enums import ReadMatchType, WriteMatchType


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults. cache_version falls back to the
    host application's version (see vapic.core.app_version).
    """

    # App
    app_name: str = "vapic"
    app_version: str = "0.1.0"
    debug: bool = False

    # Redis backing store
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_socket_timeout: float = 5.0

    # Versioned cache
    cache_prefix: str = DEFAULT_CACHE_PREFIX
    cache_version: str | None = None
    cache_permitted_age: int = DEFAULT_PERMITTED_AGE
    cache_read_match_type: str = ReadMatchType.EXACT.value
    cache_write_match_type: str = WriteMatchType.EXACT.value
    cache_max_versions: int | None = None
    cache_read_version_from_header: bool = False
    # Host distribution whose installed version is the default cache version
    host_distribution: str | None = None

    # Request negotiation: only paths under this prefix are looked up
    negotiation_path_prefix: str = "/api/v1/resources"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_cache_options(self) -> "Settings":
        """Validate match types and numeric cache options."""
        if self.cache_read_match_type not in ReadMatchType.values():
            raise ValueError(
                f"cache_read_match_type must be one of {ReadMatchType.values()}, "
                f"got: {self.cache_read_match_type!r}"
            )
        if self.cache_write_match_type not in WriteMatchType.values():
            raise ValueError(
                f"cache_write_match_type must be one of {WriteMatchType.values()}, "
                f"got: {self.cache_write_match_type!r}"
            )
        if self.cache_max_versions is not None and self.cache_max_versions < 1:
            raise ValueError("cache_max_versions must be a positive integer")
        if self.cache_permitted_age < 0:
            raise ValueError("cache_permitted_age must not be negative")
        if not self.cache_prefix:
            raise ValueError("cache_prefix must not be empty")
        return self

    def resolved_cache_version(self) -> str:
        """Return cache_version, or the discovered host application version."""
        return resolve_app_version(
            explicit=self.cache_version,
            host_distribution=self.host_distribution,
        )

    def to_cache_options(self) -> CacheOptions:
        """Build immutable CacheOptions from these settings."""
        return CacheOptions(
            cache_version=self.resolved_cache_version(),
            prefix=self.cache_prefix,
            permitted_age=self.cache_permitted_age,
            read_match_type=ReadMatchType(self.cache_read_match_type),
            write_match_type=WriteMatchType(self.cache_write_match_type),
            max_versions=self.cache_max_versions,
            read_version_from_header=self.cache_read_version_from_header,
        )


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
