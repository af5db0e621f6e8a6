"""
Base service layer patterns for business logic encapsulation.

This module provides foundational patterns for the service layer:
- ServiceResult: Standard result wrapper for consistent success/failure handling
- BaseService: Base class with common service utilities

Service Layer Philosophy:
    Services encapsulate business logic separate from views and models.
    Views handle HTTP concerns, models handle data, services handle logic.

Pattern Comparison:
    - ServiceResult: Use for expected failures (validation, business rules)
    - Exceptions: Use for unexpected failures (database errors, bugs)

Usage:
    from core.services import BaseService, ServiceResult

    class AccountService(BaseService):
        @classmethod
        def save(cls, user: User) -> ServiceResult[User]:
            try:
                user.full_clean()
            except DjangoValidationError as e:
                return ServiceResult.from_validation_error(e)

            with cls.atomic():
                user.save()

            cls.get_logger().info(f"Saved account {user.pk}")
            return ServiceResult.success(user)

    # In view
    result = AccountService.save(user)
    if result.success:
        return Response(AccountSerializer(result.data).data)
    return Response(result.to_response(), status=400)

Related:
    - core.exceptions: For unexpected/exceptional errors
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from django.core.exceptions import NON_FIELD_ERRORS
from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator
    from typing import Any

    from django.core.exceptions import ValidationError as DjangoValidationError

# Generic type for ServiceResult data
T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Provides consistent success/failure handling without exceptions.
    Use this for expected failures (validation errors, business rule violations).

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Error message if failed (None if successful)
        error_code: Machine-readable error code for client handling
        errors: Field-level errors for validation failures

    Usage:
        # Success case
        return ServiceResult.success(user)

        # Validation errors with field details
        return ServiceResult.failure(
            "Validation failed",
            error_code="VALIDATION_ERROR",
            errors={"username": ["This field cannot be blank."]}
        )
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, list[str]] | None = field(default=None)

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """
        Create a successful result.

        Args:
            data: The result data

        Returns:
            ServiceResult with success=True and data set
        """
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code for client handling
            errors: Field-level errors (for validation failures)

        Returns:
            ServiceResult with success=False and error details
        """
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            errors=errors,
        )

    @classmethod
    def from_validation_error(cls, exc: DjangoValidationError) -> ServiceResult[T]:
        """
        Create a failed result from a Django model ValidationError.

        Field errors keep their field name; errors that are not tied to a
        field are reported under "non_field_errors".

        Args:
            exc: ValidationError raised by full_clean()

        Returns:
            ServiceResult with error_code VALIDATION_ERROR and field errors
        """
        if hasattr(exc, "error_dict"):
            errors = {
                ("non_field_errors" if name == NON_FIELD_ERRORS else name): messages
                for name, messages in exc.message_dict.items()
            }
        else:
            errors = {"non_field_errors": list(exc.messages)}
        return cls.failure(
            "Validation failed",
            error_code="VALIDATION_ERROR",
            errors=errors,
        )

    def to_response(self) -> dict[str, Any]:
        """
        Convert to API response format.

        Returns:
            Dict with success status and data or error details
        """
        if self.success:
            return {"success": True, "data": self.data}

        response: dict[str, Any] = {
            "success": False,
            "error": self.error,
        }
        if self.error_code:
            response["error_code"] = self.error_code
        if self.errors:
            response["errors"] = self.errors
        return response

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.success


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management

    Design Notes:
        - Use @staticmethod or @classmethod (no instance state)
        - Services should be stateless
        - Use ServiceResult for expected failures
        - Raise exceptions for unexpected failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        All database operations within this context manager are
        wrapped in a transaction. If any operation fails, all
        changes are rolled back.

        Example:
            with cls.atomic():
                user.save()
                Organization.objects.create(user=user, name=name)
        """
        with transaction.atomic():
            yield
