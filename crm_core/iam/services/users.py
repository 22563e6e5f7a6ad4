# backend/crm_core/iam/services/users.py
from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework.exceptions import ValidationError

from crm_core.common.api.exceptions import NotFoundError
from crm_core.common.store import store_guard
from crm_core.iam.access import forbid_self_target, require_admin
from crm_core.iam.identity import Actor
from crm_core.iam.models import AccountStatus, UserProfile, UserRole

logger = logging.getLogger(__name__)


def _profile_for_update(user_id: int) -> UserProfile:
    User = get_user_model()
    user = User.objects.filter(pk=user_id).first()
    if user is None:
        raise NotFoundError(f"User {user_id} not found.")
    profile, _ = UserProfile.objects.select_for_update().get_or_create(user=user)
    return profile


class UserService:
    """
    Privileged account changes. The access gate runs before anything touches the store,
    so a refused caller leaves no trace.
    """

    @staticmethod
    @store_guard
    def update_role(*, actor: Actor, user_id: int, role: str) -> UserProfile:
        require_admin(actor.role)
        forbid_self_target(actor.user_id, user_id)

        if role not in UserRole.values:
            raise ValidationError({"role": f"Must be one of: {', '.join(UserRole.values)}."})

        with transaction.atomic():
            profile = _profile_for_update(user_id)
            old = profile.role
            if old != role:
                profile.role = role
                profile.save(update_fields=["role", "updated_at"])
                logger.info("User %s role changed %s -> %s by %s", user_id, old, role, actor.user_id)
        return profile

    @staticmethod
    @store_guard
    def update_status(*, actor: Actor, user_id: int, status: str) -> UserProfile:
        require_admin(actor.role)
        forbid_self_target(actor.user_id, user_id)

        if status not in AccountStatus.values:
            raise ValidationError({"status": f"Must be one of: {', '.join(AccountStatus.values)}."})

        with transaction.atomic():
            profile = _profile_for_update(user_id)
            old = profile.status
            if old != status:
                profile.status = status
                profile.save(update_fields=["status", "updated_at"])
                logger.info("User %s status changed %s -> %s by %s", user_id, old, status, actor.user_id)
        return profile

    @staticmethod
    @store_guard
    @transaction.atomic
    def update_preferences(*, user, notification_method: str | None = None, email_notifications: str | None = None) -> UserProfile:
        """
        Self-service notification preferences; no admin gate.
        """
        profile, _ = UserProfile.objects.select_for_update().get_or_create(user=user)
        updates = []
        if notification_method is not None:
            profile.notification_method = notification_method
            updates.append("notification_method")
        if email_notifications is not None:
            profile.email_notifications = email_notifications
            updates.append("email_notifications")
        if updates:
            profile.save(update_fields=updates + ["updated_at"])
        return profile
