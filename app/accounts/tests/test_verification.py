"""
Tests for VerificationMixin predicates on User.

No database access: the predicates only read fields on the instance.
"""

import pytest
from django.utils import timezone

from accounts.models import User


class TestVerificationLevels:
    def test_new_account_is_unverified(self):
        user = User()

        assert user.is_unverified
        assert not user.is_level_two_verified
        assert not user.is_level_three_verified

    def test_residence_and_sms_give_level_two(self):
        user = User(residence_verified_at=timezone.now(), confirmed_phone="600000000")

        assert user.is_residence_verified
        assert user.is_sms_verified
        assert user.is_level_two_verified
        assert not user.is_unverified

    @pytest.mark.parametrize(
        "fields",
        [
            {"residence_verified_at": timezone.now()},
            {"confirmed_phone": "600000000"},
        ],
    )
    def test_one_step_is_not_level_two(self, fields):
        assert not User(**fields).is_level_two_verified

    def test_explicit_level_two(self):
        assert User(level_two_verified_at=timezone.now()).is_level_two_verified

    def test_level_three(self):
        user = User(verified_at=timezone.now())

        assert user.is_level_three_verified
        assert not user.is_unverified

    def test_verification_email_sent(self):
        assert User(email_verification_token="token").verification_email_sent
        assert not User().verification_email_sent
