# backend/crm_core/payments/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from crm_core.payments.models import Payment


def list_payments(*, payment_status: str | None = None) -> QuerySet[Payment]:
    qs = Payment.objects.all()
    if payment_status:
        qs = qs.filter(payment_status=payment_status)
    return qs.order_by("-created_at", "-id")


def payment_for_enquiry(enquiry_id: int) -> Payment | None:
    return Payment.objects.filter(enquiry_id=enquiry_id).first()
