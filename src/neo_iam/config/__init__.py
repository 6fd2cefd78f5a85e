"""Configuration module for neo-iam."""

from .constants import (
    CacheKeys,
    CacheTTL,
    CacheBackendType,
    CrudAction,
    DatabaseSchemas,
    RoleTier,
    ROLE_TIER_HIERARCHY,
)
from .settings import IamSettings, get_settings
from .logging_config import LoggingConfig, LogFormat

__all__ = [
    "CacheKeys",
    "CacheTTL",
    "CacheBackendType",
    "CrudAction",
    "DatabaseSchemas",
    "RoleTier",
    "ROLE_TIER_HIERARCHY",
    "IamSettings",
    "get_settings",
    "LoggingConfig",
    "LogFormat",
]
