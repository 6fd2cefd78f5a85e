"""Base exceptions for neo-iam.

All exceptions inherit from NeoIamError and carry an error code and a
details dict so that any caller (HTTP layer, message consumer, test
harness) can translate them without string matching.
"""

from typing import Any, Dict, Optional


class NeoIamError(Exception):
    """Base exception for all neo-iam errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


def create_error_response(exception: NeoIamError) -> Dict[str, Any]:
    """Create standardized error response from exception.

    Args:
        exception: The neo-iam exception

    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
