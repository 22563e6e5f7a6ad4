# backend/crm_core/iam/access.py
"""
Access policy gate for privileged account operations.

Both checks run before any store access so a refused call performs no mutation.
"""
from __future__ import annotations

from crm_core.common.api.exceptions import AuthorizationError
from crm_core.iam.models import UserRole

ADMIN_REQUIRED_MSG = "Admin access required"
SELF_TARGET_MSG = "You cannot change your own role or status."


def require_admin(actor_role: str | None) -> None:
    if actor_role != UserRole.ADMIN:
        raise AuthorizationError(ADMIN_REQUIRED_MSG)


def forbid_self_target(actor_id: int, target_id: int) -> None:
    if int(actor_id) == int(target_id):
        raise AuthorizationError(SELF_TARGET_MSG)
