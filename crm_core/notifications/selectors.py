from __future__ import annotations

from django.db.models import QuerySet

from crm_core.notifications.models import Notification, NotificationChannel


def notifications_for(*, user_id: int) -> QuerySet[Notification]:
    return Notification.objects.filter(recipient_id=user_id, channel=NotificationChannel.IN_APP)
