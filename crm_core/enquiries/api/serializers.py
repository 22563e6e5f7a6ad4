# backend/crm_core/enquiries/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from crm_core.enquiries.models import Enquiry, EnquiryStatus
from crm_core.enquiries.services import CREATE_FIELDS, IMMUTABLE_FIELDS, UPDATE_FIELDS


class EnquirySerializer(serializers.ModelSerializer):
    created_by_id = serializers.IntegerField(read_only=True, allow_null=True)
    is_terminal = serializers.BooleanField(read_only=True)

    class Meta:
        model = Enquiry
        fields = [
            "id",
            "enquiry_id",
            *sorted(UPDATE_FIELDS),
            "matter_code",
            "is_terminal",
            "created_by_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class _EnquiryWriteSerializer(serializers.ModelSerializer):
    """
    Parses boundary strings (ISO dates, decimal text) into model values.
    Domain rules live in EnquiryService; this only shapes input.
    """
    current_status = serializers.ChoiceField(choices=EnquiryStatus.choices, required=False)

    def validate(self, attrs):
        blocked = sorted(IMMUTABLE_FIELDS & set(self.initial_data or {}))
        if blocked:
            raise serializers.ValidationError({k: "This field is read-only." for k in blocked})
        return attrs


class EnquiryCreateSerializer(_EnquiryWriteSerializer):
    class Meta:
        model = Enquiry
        fields = sorted(CREATE_FIELDS)
        extra_kwargs = {
            "date_of_enquiry": {"required": True},
            "client_name": {"required": True, "allow_blank": False},
        }


class EnquiryUpdateSerializer(_EnquiryWriteSerializer):
    class Meta:
        model = Enquiry
        fields = sorted(UPDATE_FIELDS)


class EnquiryCreatedSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    enquiry_id = serializers.CharField()


class StatusSummarySerializer(serializers.Serializer):
    status = serializers.CharField()
    count = serializers.IntegerField()


class KpiMetricsSerializer(serializers.Serializer):
    total_enquiries = serializers.IntegerField()
    converted_enquiries = serializers.IntegerField()
    conversion_rate = serializers.FloatField()
    this_month_enquiries = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=17, decimal_places=2)


class ForecastRowSerializer(serializers.Serializer):
    status = serializers.CharField()
    count = serializers.IntegerField()
    total_value = serializers.DecimalField(max_digits=17, decimal_places=2)
    probability = serializers.FloatField()
    weighted_value = serializers.DecimalField(max_digits=18, decimal_places=3)
