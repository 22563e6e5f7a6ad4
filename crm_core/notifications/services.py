# backend/crm_core/notifications/services.py
from __future__ import annotations

import logging
from typing import Iterable

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import send_mail
from django.db import transaction
from django.db.models import Q, Value
from django.db.models.functions import Concat

from crm_core.iam.identity import get_profile
from crm_core.iam.models import AccountStatus, UserRole
from crm_core.notifications.models import Notification, NotificationChannel

logger = logging.getLogger(__name__)


def notifications_enabled() -> bool:
    return bool(getattr(settings, "CRM_NOTIFICATIONS_ENABLED", True))


def admin_recipients(*, exclude_user_id: int | None = None) -> list:
    User = get_user_model()
    qs = User.objects.select_related("crm_profile").filter(
        is_active=True,
        crm_profile__role=UserRole.ADMIN,
        crm_profile__status=AccountStatus.ACTIVE,
    )
    if exclude_user_id is not None:
        qs = qs.exclude(pk=exclude_user_id)
    return list(qs.order_by("id"))


def resolve_lawyer(name: str | None):
    """
    Match a free-text lead lawyer name to an active account.
    Tries username, then "first last"; ambiguous names match nobody.
    """
    name = (name or "").strip()
    if not name:
        return None

    User = get_user_model()
    qs = (
        User.objects.filter(is_active=True, crm_profile__status=AccountStatus.ACTIVE)
        .annotate(full_name=Concat("first_name", Value(" "), "last_name"))
        .filter(Q(username__iexact=name) | Q(full_name__iexact=name))
    )
    matches = list(qs[:2])
    if len(matches) != 1:
        if matches:
            logger.info("Lead lawyer %r matches several accounts; not notifying", name)
        return None
    return matches[0]


class NotificationService:
    @staticmethod
    @transaction.atomic
    def notify_users_in_app(
        *,
        user_ids: Iterable[int],
        event: str,
        title: str,
        body: str = "",
        enquiry_pk: int | None = None,
        enquiry_code: str = "",
        meta: dict | None = None,
    ) -> list[Notification]:
        objs = [
            Notification(
                recipient_id=uid,
                channel=NotificationChannel.IN_APP,
                event=event,
                title=title,
                body=body,
                enquiry_pk=enquiry_pk,
                enquiry_code=enquiry_code or "",
                meta=meta or {},
            )
            for uid in user_ids
        ]
        return Notification.objects.bulk_create(objs)

    @staticmethod
    def deliver(
        *,
        users: Iterable,
        event: str,
        title: str,
        body: str = "",
        enquiry_pk: int | None = None,
        enquiry_code: str = "",
    ) -> int:
        """
        Send to each user through the channels their profile asks for.
        Returns the number of deliveries made.
        """
        in_app_ids = []
        delivered = 0

        for user in users:
            profile = get_profile(user)
            if profile.wants_in_app:
                in_app_ids.append(user.pk)
            if profile.wants_email and user.email:
                send_mail(
                    subject=title,
                    message=body,
                    from_email=settings.DEFAULT_FROM_EMAIL,
                    recipient_list=[user.email],
                    fail_silently=False,
                )
                Notification.objects.create(
                    recipient_id=user.pk,
                    channel=NotificationChannel.EMAIL,
                    event=event,
                    title=title,
                    body=body,
                    enquiry_pk=enquiry_pk,
                    enquiry_code=enquiry_code or "",
                    is_read=True,
                )
                delivered += 1

        if in_app_ids:
            NotificationService.notify_users_in_app(
                user_ids=in_app_ids,
                event=event,
                title=title,
                body=body,
                enquiry_pk=enquiry_pk,
                enquiry_code=enquiry_code,
            )
            delivered += len(in_app_ids)
        return delivered
