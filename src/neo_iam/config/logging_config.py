"""Centralized logging configuration for neo-iam.

Handlers in this package log operation outcomes through module loggers;
this module wires those loggers to a console handler once per process.
"""

import logging
import logging.config
import os
from enum import Enum
from typing import Any, Dict, Optional


class LogFormat(str, Enum):
    """Supported log line formats."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


FORMAT_STRINGS = {
    LogFormat.SIMPLE: "%(asctime)s - %(levelname)s - %(message)s",
    LogFormat.DETAILED: "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    LogFormat.JSON: '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}',
}


class LoggingConfig:
    """Centralized logging configuration manager."""

    # Modules that should only log errors
    ERROR_ONLY_MODULES = [
        "asyncio",
        "asyncpg",
        "redis",
    ]

    @classmethod
    def build_config(cls, log_level: str = "INFO", log_format: str = "simple") -> Dict[str, Any]:
        """Build a dictConfig mapping for the given level and format."""
        try:
            fmt = LogFormat(log_format.lower())
        except ValueError:
            fmt = LogFormat.SIMPLE

        logging_config: Dict[str, Any] = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": FORMAT_STRINGS[fmt],
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": log_level.upper(),
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {
                "level": log_level.upper(),
                "handlers": ["console"],
            },
            "loggers": {},
        }

        for module in cls.ERROR_ONLY_MODULES:
            logging_config["loggers"][module] = {
                "level": "ERROR",
                "handlers": ["console"],
                "propagate": False,
            }

        return logging_config

    @classmethod
    def configure(cls, log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
        """Configure logging from arguments, falling back to IAM_LOG_* env vars."""
        level = (log_level or os.getenv("IAM_LOG_LEVEL", "INFO")).upper()
        fmt = log_format or os.getenv("IAM_LOG_FORMAT", "simple")

        logging.config.dictConfig(cls.build_config(level, fmt))

        # Logging failures must not propagate into business operations.
        logging.raiseExceptions = False

        logging.getLogger(__name__).debug(f"Logging configured: level={level}, format={fmt}")
