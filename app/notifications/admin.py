"""
Django admin configuration for notification models.
"""

from django.contrib import admin

from notifications.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """Read-mostly view of pending notifications."""

    list_display = ["user", "notifiable_type", "notifiable_id", "counter", "updated_at"]
    list_filter = ["notifiable_type"]
    raw_id_fields = ["user"]
    readonly_fields = ["created_at", "updated_at"]
