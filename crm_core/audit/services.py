# backend/crm_core/audit/services.py
from __future__ import annotations

from typing import Any

from django.db import transaction

from crm_core.audit.models import AuditAction, AuditLog
from crm_core.common.api.exceptions import NotFoundError


def as_text(value: Any) -> str | None:
    """
    Audit values are stored as text; dates go out ISO formatted.
    """
    if value is None:
        return None
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


class AuditService:
    """
    Central audit writer.

    Callers invoke this inside their own transaction.atomic block so the audit
    row commits or rolls back together with the mutation it describes.
    """

    @staticmethod
    @transaction.atomic
    def record(
        *,
        enquiry_id: int,
        user_id: int | None,
        action: str,
        field_name: str | None = None,
        old_value: Any = None,
        new_value: Any = None,
        description: str | None = None,
    ) -> AuditLog:
        # Imported lazily: enquiries depends on audit, not the other way round.
        from crm_core.enquiries.models import Enquiry

        if action not in AuditAction.values:
            raise ValueError(f"Unknown audit action: {action}")

        if not Enquiry.objects.filter(pk=enquiry_id).exists():
            raise NotFoundError(f"Enquiry {enquiry_id} not found.")

        return AuditLog.objects.create(
            enquiry_id=enquiry_id,
            user_id=user_id,
            action=action,
            field_name=field_name,
            old_value=as_text(old_value),
            new_value=as_text(new_value),
            description=description,
        )
