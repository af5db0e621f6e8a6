"""
Django signals for accounts.

This module defines signal handlers for:
- Sign-in tracking (count, current/last time and IP)

Related files:
    - models.py: User tracking fields
    - apps.py: Signal import in ready()

Usage:
    Signals are automatically connected when the app is ready.
    See apps.py for the import that triggers connection.
"""

import logging

from django.contrib.auth.signals import user_logged_in
from django.dispatch import receiver
from django.utils import timezone

from core.helpers import get_client_ip

logger = logging.getLogger(__name__)


@receiver(user_logged_in)
def track_sign_in(sender, request, user, **kwargs):
    """
    Record a successful sign-in on the account.

    The previous "current" values move to the "last" fields.
    """
    now = timezone.now()
    ip = (get_client_ip(request) if request is not None else "") or None

    user.last_sign_in_at = user.current_sign_in_at or now
    user.last_sign_in_ip = user.current_sign_in_ip or ip
    user.current_sign_in_at = now
    user.current_sign_in_ip = ip
    user.sign_in_count = (user.sign_in_count or 0) + 1
    user.save(
        update_fields=[
            "sign_in_count",
            "current_sign_in_at",
            "last_sign_in_at",
            "current_sign_in_ip",
            "last_sign_in_ip",
        ]
    )
    logger.debug(
        "Sign-in tracked",
        extra={"user_id": user.pk, "sign_in_count": user.sign_in_count},
    )
