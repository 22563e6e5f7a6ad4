# backend/crm_core/payments/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from crm_core.payments.models import Payment
from crm_core.payments.services import PAYMENT_FIELDS


class PaymentSerializer(serializers.ModelSerializer):
    enquiry_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Payment
        fields = [
            "id",
            "enquiry_id",
            "matter_code",
            *sorted(PAYMENT_FIELDS),
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PaymentWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Payment
        fields = sorted(PAYMENT_FIELDS)


class PaymentCreateSerializer(PaymentWriteSerializer):
    enquiry_id = serializers.IntegerField()
    matter_code = serializers.CharField(max_length=20, required=False, allow_blank=True)

    class Meta(PaymentWriteSerializer.Meta):
        fields = ["enquiry_id", "matter_code", *sorted(PAYMENT_FIELDS)]
