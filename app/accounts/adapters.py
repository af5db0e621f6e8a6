"""
Custom adapters for django-allauth.

Email/password signup goes through CustomAccountAdapter, external
identity logins (Google, Facebook) through CustomSocialAccountAdapter.
Both save accounts via AccountService so the account validation rules
apply to every signup path.

Related files:
    - services.py: AccountService
    - oauth.py: OAuthPayload built from allauth SocialLogin
    - settings.py: ACCOUNT_ADAPTER and SOCIALACCOUNT_ADAPTER settings

Security:
    - Provider emails are trusted only when the provider verified them
    - A login whose verified email matches an account is connected to it
    - Every provider login is recorded as an Identity
"""

import logging

from allauth.account.adapter import DefaultAccountAdapter
from allauth.socialaccount.adapter import DefaultSocialAccountAdapter
from django.core.exceptions import ValidationError

from accounts.oauth import OAuthPayload
from accounts.services import AccountService

logger = logging.getLogger(__name__)


class CustomAccountAdapter(DefaultAccountAdapter):
    """
    Adapter for email/password registration.

    Usage:
        Configure in settings.py:
        ACCOUNT_ADAPTER = 'accounts.adapters.CustomAccountAdapter'
    """

    def save_user(self, request, user, form, commit=True):
        """
        Save the user with the terms of service accepted on the form.

        Raises:
            ValidationError: The account does not satisfy the account rules
        """
        user = super().save_user(request, user, form, commit=False)
        user.terms_of_service = form.cleaned_data.get("terms_of_service")

        if commit:
            result = AccountService.save(user)
            if not result:
                raise ValidationError(result.errors)

            logger.info(
                "Email user registered",
                extra={"user_id": user.pk, "email": user.email},
            )

        return user


class CustomSocialAccountAdapter(DefaultSocialAccountAdapter):
    """
    Adapter for external identity logins.

    This adapter handles:
    - Connecting logins to existing accounts with the same verified email
    - Filling new accounts from provider data
    - Saving accounts that fail validation as pending signups
    - Recording the provider identity

    Usage:
        Configure in settings.py:
        SOCIALACCOUNT_ADAPTER = 'accounts.adapters.CustomSocialAccountAdapter'
    """

    def pre_social_login(self, request, sociallogin):
        """Connect a first-time login to the account owning its verified email."""
        if sociallogin.is_existing:
            return

        payload = OAuthPayload.from_sociallogin(sociallogin)
        user = AccountService.first_or_initialize_for_oauth(payload)
        if user.pk is None:
            return

        sociallogin.connect(request, user)
        AccountService.attach_identity(user, payload)
        logger.info(
            "Social login connected to existing account",
            extra={"user_id": user.pk, "provider": payload.provider},
        )

    def populate_user(self, request, sociallogin, data):
        """
        Populate the new account from provider data.

        Returns:
            User: The populated user instance (not saved)
        """
        user = super().populate_user(request, sociallogin, data)
        payload = OAuthPayload.from_sociallogin(sociallogin)
        AccountService.initialize_for_oauth(payload, user)

        logger.debug(
            f"{payload.provider.title()} user populated",
            extra={"username": user.username, "email": user.email},
        )
        return user

    def save_user(self, request, sociallogin, form=None):
        """
        Save the account created from a social login and its identity.

        Raises:
            ValidationError: The account could not be saved even as a
                pending signup
        """
        user = sociallogin.user
        payload = OAuthPayload.from_sociallogin(sociallogin)

        result = AccountService.save_oauth_user(user)
        if not result:
            logger.warning(
                "Social user rejected",
                extra={"provider": payload.provider, "errors": result.errors},
            )
            raise ValidationError(result.errors)

        sociallogin.save(request)
        AccountService.attach_identity(user, payload)

        logger.info(
            "Social user created",
            extra={
                "user_id": user.pk,
                "provider": payload.provider,
                "pending_finish_signup": user.pending_finish_signup,
            },
        )
        return user

    def on_authentication_error(
        self, request, provider, error=None, exception=None, extra_context=None
    ):
        """Log provider errors before allauth renders its error page."""
        logger.error(
            "Social authentication error",
            extra={
                "provider": getattr(provider, "id", provider),
                "error": error,
                "exception": str(exception) if exception else None,
            },
            exc_info=exception,
        )
        return super().on_authentication_error(
            request, provider, error=error, exception=exception, extra_context=extra_context
        )
