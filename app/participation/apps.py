"""Django app configuration for participation."""

from django.apps import AppConfig


class ParticipationConfig(AppConfig):
    """Configuration for the participation app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "participation"
    verbose_name = "Participation"
