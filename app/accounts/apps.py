"""
Django app configuration for accounts.
"""

from django.apps import AppConfig, apps
from django.conf import settings

DEFAULT_USERNAME_MAX_LENGTH = 60


class AccountsConfig(AppConfig):
    """Configuration for the accounts application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"
    verbose_name = "Accounts"

    # Resolved once in ready(); read through get_username_max_length()
    username_max_length = DEFAULT_USERNAME_MAX_LENGTH

    def ready(self):
        """
        Connect signal handlers and resolve process-wide limits.

        The username length limit comes from the USERNAME_MAX_LENGTH
        setting when present, otherwise from the username column itself.
        The setting can only lower the limit: the column length is a
        hard ceiling.
        """
        from accounts import signals  # noqa: F401

        field = self.get_model("User")._meta.get_field("username")
        column_length = field.max_length or DEFAULT_USERNAME_MAX_LENGTH
        configured = getattr(settings, "USERNAME_MAX_LENGTH", None)
        if configured:
            self.username_max_length = min(int(configured), column_length)
        else:
            self.username_max_length = column_length


def get_username_max_length() -> int:
    """Return the username length limit resolved at start-up."""
    return apps.get_app_config("accounts").username_max_length
