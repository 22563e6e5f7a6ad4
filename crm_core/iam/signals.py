# backend/crm_core/iam/signals.py
from __future__ import annotations

import logging

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from crm_core.iam.models import UserProfile, UserRole

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL, dispatch_uid="iam.ensure_user_profile")
def ensure_user_profile(sender, instance, created, **kwargs):
    """
    Every auth user gets a CRM profile. The configured owner account starts as admin.
    """
    if not created:
        return

    owner = getattr(settings, "CRM_OWNER_USERNAME", "") or ""
    role = UserRole.ADMIN if owner and instance.get_username() == owner else UserRole.USER

    _, made = UserProfile.objects.get_or_create(user=instance, defaults={"role": role})
    if made and role == UserRole.ADMIN:
        logger.info("Owner account %s created with admin role", instance.get_username())
