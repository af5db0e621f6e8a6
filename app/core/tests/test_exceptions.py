"""
Tests for the application exception hierarchy in core/exceptions.py.
"""

import pytest

from core.exceptions import (
    BaseApplicationError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)


class TestBaseApplicationError:
    def test_to_dict_with_details(self):
        exc = NotFoundError(
            "Account with ID 42 not found",
            error_code="ACCOUNT_NOT_FOUND",
            details={"user_id": 42},
        )

        assert exc.to_dict() == {
            "error": "Account with ID 42 not found",
            "error_code": "ACCOUNT_NOT_FOUND",
            "details": {"user_id": 42},
        }

    def test_to_dict_without_details(self):
        assert "details" not in ConflictError("Already erased").to_dict()

    @pytest.mark.parametrize(
        "exc_class,code",
        [
            (BaseApplicationError, "APPLICATION_ERROR"),
            (NotFoundError, "NOT_FOUND"),
            (PermissionDeniedError, "PERMISSION_DENIED"),
            (ConflictError, "CONFLICT"),
        ],
    )
    def test_default_error_codes(self, exc_class, code):
        assert exc_class("message").error_code == code

    def test_str_and_repr(self):
        exc = PermissionDeniedError("Moderator required", error_code="MODERATOR_REQUIRED")

        assert str(exc) == "[MODERATOR_REQUIRED] Moderator required"
        assert repr(exc).startswith("PermissionDeniedError(message='Moderator required'")

    def test_subclasses_share_base(self):
        with pytest.raises(BaseApplicationError):
            raise NotFoundError("missing")
