# backend/crm_core/audit/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from crm_core.audit.models import AuditLog
from crm_core.common.api.exceptions import NotFoundError
from crm_core.common.api.pagination import clamp_window


def audit_logs_for_enquiry(enquiry_id: int) -> QuerySet[AuditLog]:
    from crm_core.enquiries.models import Enquiry

    if not Enquiry.objects.filter(pk=enquiry_id).exists():
        raise NotFoundError(f"Enquiry {enquiry_id} not found.")

    return (
        AuditLog.objects.select_related("user")
        .filter(enquiry_id=enquiry_id)
        .order_by("-created_at", "-id")
    )


def list_audit_logs(*, limit=100, offset=0, action: str | None = None, user_id: int | None = None) -> list[AuditLog]:
    """
    Practice-wide audit trail, newest first, windowed by limit/offset.
    """
    limit_n, offset_n = clamp_window(limit, offset)

    qs = AuditLog.objects.select_related("user", "enquiry")
    if action:
        qs = qs.filter(action=action)
    if user_id is not None:
        qs = qs.filter(user_id=user_id)

    return list(qs.order_by("-created_at", "-id")[offset_n:offset_n + limit_n])
