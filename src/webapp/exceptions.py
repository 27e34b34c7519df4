"""
Custom exceptions for the Pricing Parity web application.

Provides a hierarchy of exceptions for clean error handling in routes.
"""

from typing import Any, Dict, Optional


class AppException(Exception):
    """Base exception for application errors."""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if status_code:
            self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(AppException):
    """Raised when input validation fails."""

    status_code = 400
    error_code = "VALIDATION_ERROR"


class ExternalAPIError(AppException):
    """Raised when the country directory or rate source fails."""

    status_code = 502
    error_code = "EXTERNAL_API_ERROR"

    def __init__(self, message: str, api_name: str, cause: Optional[str] = None):
        details = {"api": api_name}
        if cause:
            details["cause"] = cause
        super().__init__(message, details=details)
