# backend/crm_core/audit/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from crm_core.audit.models import AuditLog


class AuditLogSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True, allow_null=True)
    user_name = serializers.SerializerMethodField()
    user_email = serializers.SerializerMethodField()

    class Meta:
        model = AuditLog
        fields = [
            "id",
            "action",
            "field_name",
            "old_value",
            "new_value",
            "description",
            "created_at",
            "user_id",
            "user_name",
            "user_email",
        ]
        read_only_fields = fields

    def get_user_name(self, obj) -> str | None:
        if obj.user is None:
            return None
        return obj.user.get_full_name() or obj.user.get_username()

    def get_user_email(self, obj) -> str | None:
        return obj.user.email if obj.user is not None else None


class AuditLogListSerializer(AuditLogSerializer):
    """
    Practice-wide row: adds the enquiry code and client name.
    """
    enquiry_id = serializers.IntegerField(read_only=True)
    enquiry_code = serializers.CharField(source="enquiry.enquiry_id", read_only=True)
    client_name = serializers.CharField(source="enquiry.client_name", read_only=True)

    class Meta(AuditLogSerializer.Meta):
        fields = AuditLogSerializer.Meta.fields + ["enquiry_id", "enquiry_code", "client_name"]
        read_only_fields = fields
