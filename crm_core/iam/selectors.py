# backend/crm_core/iam/selectors.py
from __future__ import annotations

from django.contrib.auth import get_user_model
from django.db.models import F, QuerySet

from crm_core.audit.models import AuditLog
from crm_core.common.api.exceptions import NotFoundError
from crm_core.common.store import store_guard
from crm_core.enquiries.models import Enquiry


def list_users() -> QuerySet:
    """
    All accounts, most recently signed-in first (never-signed-in last).
    """
    User = get_user_model()
    return (
        User.objects.select_related("crm_profile")
        .order_by(F("last_login").desc(nulls_last=True), "-date_joined")
    )


@store_guard
def activity_stats(user_id: int) -> dict:
    User = get_user_model()
    user = User.objects.filter(pk=user_id).first()
    if user is None:
        raise NotFoundError(f"User {user_id} not found.")

    return {
        "user_id": user.id,
        "enquiries_created": Enquiry.objects.filter(created_by_id=user.id).count(),
        "audit_entries": AuditLog.objects.filter(user_id=user.id).count(),
        "last_signed_in": user.last_login,
    }
