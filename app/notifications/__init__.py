"""
Notifications app.

Keeps one counter per (account, notifiable object) so an account can see
which of its debates, proposals or comments received new activity.

Usage:
    from notifications.models import Notification

    Notification.add(user, debate)
"""
