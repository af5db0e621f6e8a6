"""
Base exception classes for application-wide error handling.

This module provides a standardized exception hierarchy that enables:
- Consistent error responses across the application
- Machine-readable error codes for client handling
- Detailed error information for debugging

Exception Hierarchy:
    BaseApplicationError (base)
    ├── NotFoundError - Resource not found
    ├── PermissionDeniedError - Authorization failures
    └── ConflictError - State conflicts (invalid state transitions)

Usage:
    from core.exceptions import NotFoundError

    raise NotFoundError(
        "Account with ID 42 not found",
        error_code="ACCOUNT_NOT_FOUND",
        details={"user_id": 42},
    )

    # Convert to dict for API response
    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=404)

Note:
    Field-level validation failures are not exceptions here: services
    return them in a ServiceResult (see core.services).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Example:
            {
                "error": "Account with ID 42 not found",
                "error_code": "ACCOUNT_NOT_FOUND",
                "details": {"user_id": 42}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class NotFoundError(BaseApplicationError):
    """Raised when a requested resource is not found."""

    default_error_code: str = "NOT_FOUND"


class PermissionDeniedError(BaseApplicationError):
    """
    Raised when the acting account lacks a required role.

    Note:
        For authentication failures (no session), DRF's permission
        classes answer first. Use this for role checks.
    """

    default_error_code: str = "PERMISSION_DENIED"


class ConflictError(BaseApplicationError):
    """Raised when an operation conflicts with the current resource state."""

    default_error_code: str = "CONFLICT"
