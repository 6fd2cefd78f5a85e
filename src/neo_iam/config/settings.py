"""
Configuration management for neo-iam.

Settings are read from the environment (prefix ``IAM_``) or a ``.env`` file.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field, PostgresDsn, RedisDsn, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import CacheBackendType, CacheKeys, CacheTTL, DatabaseSchemas


class IamSettings(BaseSettings):
    """Runtime settings for the authorization core."""

    model_config = SettingsConfigDict(
        env_prefix="IAM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: Optional[PostgresDsn] = Field(default=None)
    db_schema: str = Field(default=DatabaseSchemas.ADMIN)
    db_pool_min_size: int = Field(default=1, ge=1)
    db_pool_max_size: int = Field(default=10, ge=1)

    # Permission cache
    cache_backend: CacheBackendType = Field(default=CacheBackendType.MEMORY)
    redis_url: Optional[RedisDsn] = Field(default=None)
    permission_cache_prefix: str = Field(default=CacheKeys.PERMISSIONS_PREFIX)
    permission_cache_ttl: int = Field(default=CacheTTL.PERMISSIONS_DEFAULT, gt=0)

    # Event publication
    event_stream_name: str = Field(default="events:iam")
    event_stream_max_len: int = Field(default=100000, gt=0)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="simple")

    @field_validator("db_schema")
    @classmethod
    def validate_schema(cls, value: str) -> str:
        if value == DatabaseSchemas.ADMIN or value.startswith(DatabaseSchemas.TENANT_PREFIX):
            return value
        raise ValueError(f"Invalid schema name: {value}")

    @field_validator("permission_cache_prefix")
    @classmethod
    def validate_prefix(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("permission_cache_prefix must not be empty")
        return value if value.endswith(":") else f"{value}:"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {value}")
        return level

    def is_redis_cache(self) -> bool:
        """Check whether the permission cache is backed by Redis."""
        return self.cache_backend == CacheBackendType.REDIS


@lru_cache()
def get_settings() -> IamSettings:
    """Get cached settings instance."""
    return IamSettings()
