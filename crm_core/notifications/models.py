# backend/crm_core/notifications/models.py
from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils import timezone

from crm_core.common.models import TimeStampedModel


class NotificationChannel(models.TextChoices):
    IN_APP = "in_app", "In App"
    EMAIL = "email", "Email"


class Notification(TimeStampedModel):
    """
    Delivery record per user. E-mail deliveries are recorded too so the
    trail shows what went out.
    Enquiry link is loose (no FK) so notifications outlive deleted enquiries.
    """
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
    )
    channel = models.CharField(
        max_length=16,
        choices=NotificationChannel.choices,
        default=NotificationChannel.IN_APP,
        db_index=True,
    )

    title = models.CharField(max_length=255)
    body = models.TextField(blank=True, default="")

    event = models.CharField(max_length=64, db_index=True)
    enquiry_pk = models.BigIntegerField(null=True, blank=True, db_index=True)
    enquiry_code = models.CharField(max_length=20, blank=True, default="")

    is_read = models.BooleanField(default=False, db_index=True)
    read_at = models.DateTimeField(null=True, blank=True)

    meta = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "notifications_notification"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["recipient", "channel", "is_read"], name="notificatio_recipie_5d8e2a_idx"),
        ]

    def mark_read(self) -> None:
        if not self.is_read:
            self.is_read = True
            self.read_at = timezone.now()
