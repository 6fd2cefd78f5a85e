"""Utility helpers for neo-iam."""

from .uuid import generate_uuid_v7
from .datetime import utc_now, ensure_utc

__all__ = [
    "generate_uuid_v7",
    "utc_now",
    "ensure_utc",
]
