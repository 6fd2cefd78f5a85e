"""neo-iam: multi-tenant RBAC authorization core.

Roles, permissions and direct grants over a region / organization /
workspace / tenant hierarchy, with a coherent permission cache and domain
events for every mutation.
"""

from .__version__ import __version__
from .config import IamSettings, LoggingConfig, RoleTier, get_settings
from .core.exceptions import (
    ConflictError,
    DomainError,
    NeoIamError,
    NotFoundError,
    ValidationError,
)
from .factory import IamServiceFactory

__all__ = [
    "__version__",
    "IamServiceFactory",
    "IamSettings",
    "LoggingConfig",
    "RoleTier",
    "get_settings",
    "NeoIamError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "DomainError",
]
