"""
Factory Boy factories for notification models.

Usage:
    from notifications.tests.factories import NotificationFactory

    notification = NotificationFactory(user=user, notifiable=debate)
"""

import factory
from django.contrib.contenttypes.models import ContentType

from accounts.tests.factories import UserFactory
from notifications.models import Notification
from participation.tests.factories import DebateFactory


class NotificationFactory(factory.django.DjangoModelFactory):
    """Notification about a debate unless `notifiable` is given."""

    class Meta:
        model = Notification
        exclude = ("notifiable",)

    user = factory.SubFactory(UserFactory)
    notifiable = factory.SubFactory(DebateFactory)
    notifiable_type = factory.LazyAttribute(
        lambda o: ContentType.objects.get_for_model(o.notifiable)
    )
    notifiable_id = factory.LazyAttribute(lambda o: o.notifiable.pk)
    counter = 1
