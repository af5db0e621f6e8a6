"""
Notification models.

A notification tells an account that something it follows (its debate,
proposal or comment) got new activity. Repeated activity on the same
object bumps a counter instead of creating more rows.

Usage:
    from notifications.models import Notification

    Notification.add(debate.author, debate)   # creates, counter=1
    Notification.add(debate.author, debate)   # counter=2
    user.notifications.all()
"""

from __future__ import annotations

from django.conf import settings
from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models
from django.db.models import F

from core.models import BaseModel


class Notification(BaseModel):
    """
    Pending activity on a notifiable object for one account.

    Fields:
        user: Account receiving the notification
        notifiable_type/notifiable_id/notifiable: Object with new activity
        counter: Number of activity events since the account last looked

    Note:
        - user CASCADE: Notifications deleted when the account is deleted
        - One row per (user, notifiable)
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
        help_text="Account receiving this notification",
    )
    notifiable_type = models.ForeignKey(
        ContentType,
        on_delete=models.CASCADE,
        help_text="Type of the object with new activity",
    )
    notifiable_id = models.PositiveBigIntegerField(
        help_text="ID of the object with new activity",
    )
    notifiable = GenericForeignKey("notifiable_type", "notifiable_id")
    counter = models.PositiveIntegerField(
        default=1,
        help_text="Activity events since the notification was created",
    )

    class Meta:
        db_table = "notifications_notification"
        ordering = ["-updated_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "notifiable_type", "notifiable_id"],
                name="unique_notification_per_notifiable",
            ),
        ]

    def __str__(self):
        return f"Notification for {self.user_id} ({self.counter})"

    @classmethod
    def add(cls, user, notifiable) -> Notification:
        """
        Record one activity event on notifiable for user.

        Returns:
            The created or updated notification
        """
        notification, created = cls.objects.get_or_create(
            user=user,
            notifiable_type=ContentType.objects.get_for_model(notifiable),
            notifiable_id=notifiable.pk,
        )
        if not created:
            cls.objects.filter(pk=notification.pk).update(counter=F("counter") + 1)
            notification.refresh_from_db(fields=["counter"])
        return notification

    def mark_as_read(self) -> None:
        """Reading a notification removes it."""
        self.delete()
