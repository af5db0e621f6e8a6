"""
Serializers for account models.

This module provides DRF serializers for:
- Organization (nested in the account, update only)
- Account (read/update of the signed-in account)
- Account search results (moderator view)
- Erase requests

Related files:
    - models.py: User and Organization models
    - views.py: Views that use these serializers
    - services.py: AccountService.save applies the account rules

Note:
    Account rules (conditional username/email requirement, username
    length, document uniqueness) live on the model. update() saves
    through AccountService and turns its field errors into a 400.
"""

from rest_framework import serializers

from accounts.models import Organization, User
from accounts.services import AccountService


class OrganizationSerializer(serializers.ModelSerializer):
    """Organization profile; verification state is read-only."""

    is_verified = serializers.BooleanField(read_only=True)
    is_rejected = serializers.BooleanField(read_only=True)

    class Meta:
        model = Organization
        fields = ["name", "responsible_name", "is_verified", "is_rejected"]
        # Uniqueness is checked by the account's full_clean
        extra_kwargs = {"name": {"validators": []}}


class AccountSerializer(serializers.ModelSerializer):
    """
    Serializer for the signed-in account.

    Organization data is nested and can be updated but not created here;
    organizations are registered through AccountService.register_organization.
    """

    name = serializers.CharField(read_only=True)
    is_official = serializers.BooleanField(read_only=True)
    is_organization = serializers.BooleanField(read_only=True)
    is_verified_organization = serializers.BooleanField(read_only=True)
    is_confirmed = serializers.BooleanField(read_only=True)
    is_level_two_verified = serializers.BooleanField(read_only=True)
    is_level_three_verified = serializers.BooleanField(read_only=True)
    pending_finish_signup = serializers.BooleanField(read_only=True)
    show_welcome_screen = serializers.BooleanField(read_only=True)
    organization = OrganizationSerializer(required=False)

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "name",
            "locale",
            "public_activity",
            "newsletter",
            "email_on_comment",
            "email_on_comment_reply",
            "official_position",
            "official_level",
            "is_official",
            "is_organization",
            "is_verified_organization",
            "is_confirmed",
            "is_level_two_verified",
            "is_level_three_verified",
            "pending_finish_signup",
            "show_welcome_screen",
            "organization",
            "date_joined",
        ]
        read_only_fields = [
            "id",
            "email",
            "official_position",
            "official_level",
            "date_joined",
        ]
        # Username rules, including its length limit, are enforced by the model
        extra_kwargs = {"username": {"max_length": None}}

    def update(self, instance, validated_data):
        organization_data = validated_data.pop("organization", None)

        if organization_data:
            organization = instance._one_to_one("organization")
            if organization is None:
                raise serializers.ValidationError(
                    {"organization": ["This account is not an organization."]}
                )
            for attr, value in organization_data.items():
                setattr(organization, attr, value)

        for attr, value in validated_data.items():
            setattr(instance, attr, value)

        result = AccountService.save(instance)
        if not result:
            raise serializers.ValidationError(result.errors)
        return result.data


class AccountSummarySerializer(serializers.ModelSerializer):
    """Account row shown to moderators in search results."""

    name = serializers.CharField(read_only=True)
    is_hidden = serializers.BooleanField(read_only=True)
    is_erased = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "name",
            "official_level",
            "is_hidden",
            "is_erased",
            "date_joined",
        ]
        read_only_fields = fields


class EraseRequestSerializer(serializers.Serializer):
    """Request body for erasing an account."""

    erase_reason = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class FinishSignupSerializer(serializers.Serializer):
    """Username and email completing an external identity registration."""

    username = serializers.CharField()
    email = serializers.EmailField()
