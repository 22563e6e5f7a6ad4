from __future__ import annotations

from rest_framework import serializers

from crm_core.notifications.models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = [
            "id",
            "event",
            "title",
            "body",
            "enquiry_pk",
            "enquiry_code",
            "is_read",
            "read_at",
            "created_at",
        ]
        read_only_fields = fields
