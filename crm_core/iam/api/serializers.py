# backend/crm_core/iam/api/serializers.py
from __future__ import annotations

from django.contrib.auth import get_user_model
from rest_framework import serializers

from crm_core.iam.identity import get_profile
from crm_core.iam.models import EmailNotifications, NotificationMethod


class UserSerializer(serializers.ModelSerializer):
    name = serializers.SerializerMethodField()
    role = serializers.SerializerMethodField()
    status = serializers.SerializerMethodField()
    notification_method = serializers.SerializerMethodField()
    email_notifications = serializers.SerializerMethodField()
    last_signed_in = serializers.DateTimeField(source="last_login", read_only=True)

    class Meta:
        model = get_user_model()
        fields = [
            "id",
            "username",
            "name",
            "email",
            "role",
            "status",
            "notification_method",
            "email_notifications",
            "last_signed_in",
            "date_joined",
        ]
        read_only_fields = fields

    def get_name(self, obj) -> str:
        return obj.get_full_name() or obj.get_username()

    def get_role(self, obj) -> str:
        return get_profile(obj).role

    def get_status(self, obj) -> str:
        return get_profile(obj).status

    def get_notification_method(self, obj) -> str:
        return get_profile(obj).notification_method

    def get_email_notifications(self, obj) -> str:
        return get_profile(obj).email_notifications


class PreferencesUpdateSerializer(serializers.Serializer):
    notification_method = serializers.ChoiceField(choices=NotificationMethod.choices, required=False)
    email_notifications = serializers.ChoiceField(choices=EmailNotifications.choices, required=False)
