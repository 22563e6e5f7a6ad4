# backend/crm_core/payments/services.py
from __future__ import annotations

import logging
from decimal import Decimal

from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from crm_core.audit.models import AuditAction
from crm_core.audit.services import AuditService
from crm_core.common.api.exceptions import ConflictError, NotFoundError
from crm_core.common.store import store_guard
from crm_core.enquiries.models import Enquiry
from crm_core.payments.models import Payment

logger = logging.getLogger(__name__)

PAYMENT_FIELDS = frozenset({
    "payment_terms",
    "payment_status",
    "total_amount",
    "amount_paid",
    "amount_outstanding",
    "retainer_paid_date",
    "retainer_amount",
    "mid_payment_date",
    "mid_payment_amount",
    "final_payment_date",
    "final_payment_amount",
    "payment_notes",
})

AMOUNT_FIELDS = (
    "total_amount",
    "amount_paid",
    "amount_outstanding",
    "retainer_amount",
    "mid_payment_amount",
    "final_payment_amount",
)


def _clean(data: dict) -> dict:
    unknown = sorted(set(data) - PAYMENT_FIELDS)
    if unknown:
        raise ValidationError({k: "Unknown payment field." for k in unknown})

    for field in AMOUNT_FIELDS:
        value = data.get(field)
        if value is not None and Decimal(value) < 0:
            raise ValidationError({field: "Amount cannot be negative."})

    if "amount_paid" in data and data["amount_paid"] is None:
        data["amount_paid"] = Decimal("0.00")
    if "payment_status" in data and not data["payment_status"]:
        raise ValidationError({"payment_status": "This field cannot be blank."})
    return data


class PaymentService:
    @staticmethod
    @store_guard
    @transaction.atomic
    def create(
        *,
        enquiry_id: int,
        data: dict,
        actor_user_id: int | None,
        matter_code: str | None = None,
    ) -> Payment:
        data = _clean(dict(data or {}))

        enquiry = Enquiry.objects.select_for_update().filter(pk=enquiry_id).first()
        if enquiry is None:
            raise NotFoundError(f"Enquiry {enquiry_id} not found.")

        if not enquiry.matter_code:
            raise ValidationError({"enquiry": "Enquiry has no matter code yet; set a conversion date first."})
        if matter_code and matter_code != enquiry.matter_code:
            raise ValidationError({"matter_code": f"Does not match the enquiry's matter code ({enquiry.matter_code})."})

        if Payment.objects.filter(enquiry_id=enquiry.pk).exists():
            raise ConflictError(f"A payment already exists for enquiry {enquiry.enquiry_id}.")

        pay = Payment(enquiry_id=enquiry.pk, matter_code=enquiry.matter_code, **data)
        pay.recompute_outstanding()
        try:
            pay.save()
        except IntegrityError:
            raise ConflictError(f"A payment already exists for enquiry {enquiry.enquiry_id}.")

        AuditService.record(
            enquiry_id=enquiry.pk,
            user_id=actor_user_id,
            action=AuditAction.UPDATED,
            field_name="payment",
            new_value=pay.payment_status,
            description=f"Payment record created for matter {pay.matter_code}",
        )
        return pay

    @staticmethod
    @store_guard
    @transaction.atomic
    def update(*, payment_id: int, data: dict, actor_user_id: int | None) -> Payment:
        data = _clean(dict(data or {}))

        pay = Payment.objects.select_for_update().filter(pk=payment_id).first()
        if pay is None:
            raise NotFoundError(f"Payment {payment_id} not found.")

        changed = []
        for field, value in data.items():
            if getattr(pay, field) != value:
                setattr(pay, field, value)
                changed.append(field)
        pay.recompute_outstanding()

        if not changed:
            return pay
        pay.save()

        if Enquiry.objects.filter(pk=pay.enquiry_id).exists():
            AuditService.record(
                enquiry_id=pay.enquiry_id,
                user_id=actor_user_id,
                action=AuditAction.UPDATED,
                field_name="payment",
                new_value=pay.payment_status,
                description=f"Payment updated ({', '.join(sorted(changed))})",
            )
        else:
            logger.info("Payment %s updated for deleted enquiry %s; no audit trail", pay.pk, pay.enquiry_id)
        return pay
