# backend/crm_core/common/permissions.py

from __future__ import annotations

from rest_framework.permissions import BasePermission

from crm_core.iam.identity import get_profile


class ActiveAccountPermission(BasePermission):
    """
    Authenticated callers whose CRM account is inactive or suspended are refused.

    Role checks are not done here; privileged operations go through
    crm_core.iam.access inside the service layer.
    """
    message = "Your account is not active."

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not getattr(user, "is_authenticated", False):
            return False
        return get_profile(user).is_active_account
