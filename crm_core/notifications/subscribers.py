# backend/crm_core/notifications/subscribers.py
"""
Enquiry event handlers. Delivery is best-effort: a failure is logged and
rolled back to its own savepoint, never surfaced to the enquiry operation.
"""
from __future__ import annotations

import functools
import logging

from django.db import transaction

from crm_core.common.events import subscribe
from crm_core.notifications.services import (
    NotificationService,
    admin_recipients,
    notifications_enabled,
    resolve_lawyer,
)

logger = logging.getLogger(__name__)


def best_effort(fn):
    @functools.wraps(fn)
    def _wrapper(payload: dict) -> None:
        if not notifications_enabled():
            return
        try:
            with transaction.atomic():
                fn(payload)
        except Exception:
            logger.exception("Notification handler %s failed for %s", fn.__name__, payload.get("enquiry_id"))

    return _wrapper


@subscribe("enquiry.created")
@best_effort
def on_enquiry_created(payload: dict) -> None:
    NotificationService.deliver(
        users=admin_recipients(exclude_user_id=payload.get("actor_user_id")),
        event="enquiry.created",
        title=f"New enquiry {payload['enquiry_id']}",
        body=f"Enquiry {payload['enquiry_id']} was logged for client {payload['client_name']}.",
        enquiry_pk=payload["enquiry_pk"],
        enquiry_code=payload["enquiry_id"],
    )


@subscribe("enquiry.status_changed")
@best_effort
def on_enquiry_status_changed(payload: dict) -> None:
    NotificationService.deliver(
        users=admin_recipients(exclude_user_id=payload.get("actor_user_id")),
        event="enquiry.status_changed",
        title=f"{payload['enquiry_id']} is now {payload['new_status']}",
        body=(
            f"Enquiry {payload['enquiry_id']} ({payload['client_name']}) moved "
            f"from {payload['old_status']} to {payload['new_status']}."
        ),
        enquiry_pk=payload["enquiry_pk"],
        enquiry_code=payload["enquiry_id"],
    )


@subscribe("enquiry.assigned")
@best_effort
def on_enquiry_assigned(payload: dict) -> None:
    lawyer = resolve_lawyer(payload.get("lawyer_name"))
    if lawyer is None:
        return

    from crm_core.enquiries.models import Enquiry

    enquiry = Enquiry.objects.filter(pk=payload["enquiry_pk"]).first()
    service = (enquiry.service_requested if enquiry else None) or "-"
    urgency = (enquiry.urgency_level if enquiry else None) or "-"

    NotificationService.deliver(
        users=[lawyer],
        event="enquiry.assigned",
        title=f"New Enquiry Assigned: {payload['enquiry_id']}",
        body=(
            f"Dear {payload['lawyer_name']},\n\n"
            "You have been assigned to a new client enquiry.\n\n"
            f"- Enquiry ID: {payload['enquiry_id']}\n"
            f"- Client Name: {payload['client_name']}\n"
            f"- Service Requested: {service}\n"
            f"- Urgency Level: {urgency}\n"
        ),
        enquiry_pk=payload["enquiry_pk"],
        enquiry_code=payload["enquiry_id"],
    )
