"""
Tests for account serializers.

Field rules are enforced by the model; these tests check that the
serializers expose the right fields and surface model errors as
DRF validation errors.
"""

import pytest
from rest_framework import serializers

from accounts.serializers import (
    AccountSerializer,
    AccountSummarySerializer,
    EraseRequestSerializer,
    FinishSignupSerializer,
)


@pytest.mark.django_db
class TestAccountSerializer:
    def test_serializes_individual_account(self, user):
        data = AccountSerializer(user).data

        assert data["username"] == "bob"
        assert data["name"] == "bob"
        assert data["email"] == "bob@example.com"
        assert data["is_organization"] is False
        assert data["organization"] is None
        assert data["pending_finish_signup"] is False

    def test_serializes_organization_account(self, organization):
        data = AccountSerializer(organization.user).data

        assert data["name"] == "Neighbours United"
        assert data["is_organization"] is True
        assert data["organization"] == {
            "name": "Neighbours United",
            "responsible_name": "Ana Pérez",
            "is_verified": False,
            "is_rejected": False,
        }

    def test_update_preferences(self, user):
        serializer = AccountSerializer(
            user, data={"newsletter": False, "locale": "es"}, partial=True
        )
        assert serializer.is_valid(), serializer.errors

        updated = serializer.save()

        updated.refresh_from_db()
        assert updated.newsletter is False
        assert updated.locale == "es"

    def test_read_only_fields_are_ignored(self, user):
        serializer = AccountSerializer(
            user,
            data={"email": "hijack@example.com", "official_level": 5},
            partial=True,
        )
        assert serializer.is_valid(), serializer.errors

        serializer.save()

        user.refresh_from_db()
        assert user.email == "bob@example.com"
        assert user.official_level == 0

    def test_taken_username_raises(self, user, other_user):
        serializer = AccountSerializer(user, data={"username": "alice"}, partial=True)
        assert serializer.is_valid(), serializer.errors

        with pytest.raises(serializers.ValidationError) as exc_info:
            serializer.save()

        assert "username" in exc_info.value.detail

    def test_username_limit_comes_from_model(self, user, monkeypatch):
        from django.apps import apps

        monkeypatch.setattr(apps.get_app_config("accounts"), "username_max_length", 5)
        serializer = AccountSerializer(user, data={"username": "toolong"}, partial=True)
        assert serializer.is_valid(), serializer.errors

        with pytest.raises(serializers.ValidationError) as exc_info:
            serializer.save()

        assert "username" in exc_info.value.detail

    def test_update_organization(self, organization):
        serializer = AccountSerializer(
            organization.user,
            data={"organization": {"responsible_name": "Luis Gómez"}},
            partial=True,
        )
        assert serializer.is_valid(), serializer.errors

        serializer.save()

        organization.refresh_from_db()
        assert organization.responsible_name == "Luis Gómez"
        assert organization.name == "Neighbours United"

    def test_organization_data_on_individual_account_raises(self, user):
        serializer = AccountSerializer(
            user, data={"organization": {"name": "New Org"}}, partial=True
        )
        assert serializer.is_valid(), serializer.errors

        with pytest.raises(serializers.ValidationError) as exc_info:
            serializer.save()

        assert "organization" in exc_info.value.detail


@pytest.mark.django_db
class TestAccountSummarySerializer:
    def test_blocked_and_erased_flags(self, user):
        user.block()
        user.erase("Spam")

        data = AccountSummarySerializer(user).data

        assert data["is_hidden"] is True
        assert data["is_erased"] is True
        assert data["username"] is None
        assert data["email"] is None


class TestRequestSerializers:
    def test_erase_reason_is_optional(self):
        assert EraseRequestSerializer(data={}).is_valid()
        assert EraseRequestSerializer(data={"erase_reason": ""}).is_valid()
        assert EraseRequestSerializer(data={"erase_reason": None}).is_valid()

    def test_finish_signup_requires_valid_email(self):
        serializer = FinishSignupSerializer(data={"username": "bob", "email": "nope"})

        assert not serializer.is_valid()
        assert "email" in serializer.errors

    def test_finish_signup_requires_username(self):
        serializer = FinishSignupSerializer(data={"email": "bob@example.com"})

        assert not serializer.is_valid()
        assert "username" in serializer.errors
