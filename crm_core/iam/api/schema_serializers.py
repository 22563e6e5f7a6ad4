# backend/crm_core/iam/api/schema_serializers.py
from __future__ import annotations

from rest_framework import serializers


class LoginRequestSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField()


class DetailResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()


class SuccessResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()


class RoleUpdateRequestSerializer(serializers.Serializer):
    role = serializers.CharField()


class StatusUpdateRequestSerializer(serializers.Serializer):
    status = serializers.CharField()


class ActivityStatsSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
    enquiries_created = serializers.IntegerField()
    audit_entries = serializers.IntegerField()
    last_signed_in = serializers.DateTimeField(allow_null=True)
