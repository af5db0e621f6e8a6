"""
Account services.

This module provides the AccountService class: account lookup for
external identity logins, validated saves that report field errors,
organization signup and the moderation entry points used by views.

Related files:
    - models.py: User, Organization, Identity
    - oauth.py: OAuthPayload
    - adapters.py: allauth adapters calling into this service
    - views.py: HTTP endpoints

Security:
    - OAuth accounts get a random throwaway password
    - Only moderators and administrators may block or erase accounts
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils import timezone

from core.exceptions import ConflictError, NotFoundError, PermissionDeniedError
from core.helpers import friendly_token
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from accounts.models import User
    from accounts.oauth import OAuthPayload

OAUTH_PASSWORD_LENGTH = 20


class AccountService(BaseService):
    """
    Centralized account business logic.

    Usage:
        from accounts.services import AccountService

        user = AccountService.first_or_initialize_for_oauth(payload)
        result = AccountService.save(user)
        if not result:
            print(result.errors)  # {"username": ["..."]}
    """

    @classmethod
    def first_or_initialize_for_oauth(cls, payload: OAuthPayload) -> User:
        """
        Find the account behind an external identity or build a new one.

        When the provider vouches for the email and an account with that
        email exists, that account is returned. Otherwise a new, unsaved
        account is built with a username candidate, a random password and
        accepted terms; it is confirmed only when the email is trusted.

        Args:
            payload: Identity data from the provider

        Returns:
            Existing account, or a new unsaved one
        """
        from accounts.models import User

        email = payload.trusted_email
        if email:
            existing = User.objects.filter(email=email).first()
            if existing is not None:
                cls.get_logger().debug(
                    "OAuth login matched existing account",
                    extra={"user_id": existing.pk, "provider": payload.provider},
                )
                return existing

        return cls.initialize_for_oauth(payload, User())

    @classmethod
    def initialize_for_oauth(cls, payload: OAuthPayload, user: User) -> User:
        """
        Fill an unsaved account from provider data.

        Sets the username candidate, the trusted email (confirmed on the
        spot), accepted terms and a random password.
        """
        email = payload.trusted_email
        user.username = payload.username
        user.email = email
        user.terms_of_service = "1"
        user.confirmed_at = timezone.now() if email else None
        user.set_password(friendly_token(OAUTH_PASSWORD_LENGTH))
        return user

    @classmethod
    def save(cls, user: User) -> ServiceResult[User]:
        """
        Validate and save an account.

        Returns:
            Success with the account, or failure with field-level errors
        """
        try:
            user.full_clean()
        except DjangoValidationError as e:
            cls.get_logger().info(
                "Account validation failed",
                extra={"user_id": user.pk, "fields": sorted(e.message_dict)},
            )
            return ServiceResult.from_validation_error(e)

        with cls.atomic():
            user.save()
            organization = user._one_to_one("organization")
            if organization is not None:
                organization.user = user
                organization.save()

        return ServiceResult.success(user)

    @classmethod
    def save_oauth_user(cls, user: User) -> ServiceResult[User]:
        """
        Save an account built from an external identity.

        If the account does not validate (taken username, missing email),
        it is saved anyway as a pending registration: the email is dropped
        and the account must finish signup before it is usable.
        """
        result = cls.save(user)
        if result:
            return result

        user.registering_with_oauth = True
        user.email = None
        result = cls.save(user)
        if result:
            cls.get_logger().info(
                "OAuth account saved pending signup",
                extra={"user_id": user.pk},
            )
        return result

    @classmethod
    def finish_signup(cls, user: User, username: str, email: str) -> ServiceResult[User]:
        """
        Complete an external identity registration with username and email.

        The new email waits for confirmation in unconfirmed_email.
        """
        user.registering_with_oauth = False
        user.username = username
        user.unconfirmed_email = email
        user.email = user.email or email
        return cls.save(user)

    @classmethod
    def attach_identity(cls, user: User, payload: OAuthPayload):
        """Link the provider identity to the account and return it."""
        from accounts.models import Identity

        identity = Identity.first_or_create_from_oauth(payload)
        if identity.user_id != user.pk:
            identity.user = user
            identity.save(update_fields=["user", "updated_at"])
            cls.get_logger().info(
                "Identity attached",
                extra={"user_id": user.pk, "provider": payload.provider},
            )
        return identity

    @classmethod
    def register_organization(
        cls,
        *,
        email: str,
        password: str,
        name: str,
        responsible_name: str,
        terms_of_service=None,
    ) -> ServiceResult[User]:
        """
        Create an organization and the account that owns it.

        The owning account needs no username; its display name is the
        organization name.
        """
        from accounts.models import Organization, User

        user = User(email=email, terms_of_service=terms_of_service)
        user.set_password(password)
        user.organization = Organization(name=name, responsible_name=responsible_name)

        result = cls.save(user)
        if result:
            cls.get_logger().info(
                "Organization registered",
                extra={"user_id": user.pk, "organization": name},
            )
        return result

    @classmethod
    def get_account(cls, user_id) -> User:
        """
        Fetch an account by id, including blocked accounts.

        Raises:
            NotFoundError: No account with that id
        """
        from accounts.models import User

        user = User.all_objects.filter(pk=user_id).first()
        if user is None:
            raise NotFoundError(
                f"Account with ID {user_id} not found",
                error_code="ACCOUNT_NOT_FOUND",
                details={"user_id": user_id},
            )
        return user

    @classmethod
    def check_moderation_rights(cls, actor: User, action: str) -> None:
        if not (actor.is_moderator or actor.is_administrator):
            raise PermissionDeniedError(
                "Moderator or administrator role required",
                error_code="MODERATOR_REQUIRED",
                details={"action": action},
            )

    @classmethod
    def block(cls, actor: User, user_id) -> User:
        """
        Block an account on behalf of a moderator.

        Raises:
            PermissionDeniedError: actor is not a moderator/administrator
            NotFoundError: No account with that id
        """
        cls.check_moderation_rights(actor, "block")
        user = cls.get_account(user_id)
        user.block()
        cls.get_logger().info(
            "Account blocked by moderator",
            extra={"user_id": user.pk, "moderator_id": actor.pk},
        )
        return user

    @classmethod
    def erase(cls, actor: User, user_id, erase_reason: str | None = None) -> User:
        """
        Erase an account on behalf of a moderator.

        Raises:
            PermissionDeniedError: actor is not a moderator/administrator
            NotFoundError: No account with that id
            ConflictError: The account is already erased
        """
        cls.check_moderation_rights(actor, "erase")
        user = cls.get_account(user_id)
        if not user.erase(erase_reason):
            raise ConflictError(
                "Account is already erased",
                error_code="ACCOUNT_ALREADY_ERASED",
                details={"user_id": user.pk},
            )
        return user
