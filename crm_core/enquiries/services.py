# backend/crm_core/enquiries/services.py
from __future__ import annotations

import logging
from contextlib import nullcontext

from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from crm_core.audit.models import AuditAction
from crm_core.audit.services import AuditService
from crm_core.common.api.exceptions import ConflictError, NotFoundError
from crm_core.common.events import publish
from crm_core.common.store import store_guard
from crm_core.enquiries.identifiers import IdentifierGenerator, default_generator
from crm_core.enquiries.models import TERMINAL_STATUSES, Enquiry, EnquiryStatus

logger = logging.getLogger(__name__)

# Set by the system, never by callers.
IMMUTABLE_FIELDS = frozenset({"id", "enquiry_id", "enquiry_seq", "matter_code", "created_by", "created_at", "updated_at"})

CREATE_FIELDS = frozenset({
    "date_of_enquiry",
    "time",
    "communication_channel",
    "received_by",
    "client_name",
    "client_type",
    "nationality",
    "email",
    "phone_number",
    "preferred_contact_method",
    "language_preference",
    "service_requested",
    "short_description",
    "urgency_level",
    "client_budget",
    "potential_value_range",
    "expected_timeline",
    "referral_source_name",
    "competitor_involvement",
    "competitor_name",
    "assigned_department",
    "suggested_lead_lawyer",
    "current_status",
    "next_action",
    "deadline",
    "internal_notes",
})

UPDATE_FIELDS = CREATE_FIELDS | frozenset({
    "first_response_date",
    "first_response_time_hours",
    "meeting_date",
    "proposal_sent_date",
    "proposal_value",
    "follow_up_count",
    "last_contact_date",
    "conversion_date",
    "engagement_letter_date",
    "payment_status",
    "invoice_number",
    "lost_reason",
})

REQUIRED_ON_CREATE = ("date_of_enquiry", "client_name")

# Changes to these are logged as "assigned" rather than "updated".
ASSIGNMENT_FIELDS = frozenset({"suggested_lead_lawyer", "assigned_department"})


def _reject_immutable(data: dict) -> None:
    blocked = sorted(IMMUTABLE_FIELDS & set(data))
    if blocked:
        raise ValidationError({k: "This field is read-only." for k in blocked})


def _validate_status(value) -> None:
    if value is None:
        raise ValidationError({"current_status": "Status cannot be null."})
    if value not in EnquiryStatus.values:
        raise ValidationError({"current_status": f"Unknown status: {value}"})


def _get_or_404(enquiry_id: int, *, for_update: bool = False) -> Enquiry:
    qs = Enquiry.objects.select_for_update() if for_update else Enquiry.objects
    enquiry = qs.filter(pk=enquiry_id).first()
    if enquiry is None:
        raise NotFoundError(f"Enquiry {enquiry_id} not found.")
    return enquiry


class EnquiryService:
    """
    Lifecycle of an enquiry: intake, status progression, conversion, removal.

    Every mutation writes its audit entries in the same transaction, so a
    change is never stored without its trail (and vice versa).
    """

    @staticmethod
    @store_guard
    def create(
        *,
        data: dict,
        actor_user_id: int | None,
        generator: IdentifierGenerator | None = None,
    ) -> Enquiry:
        generator = generator or default_generator
        data = dict(data or {})

        _reject_immutable(data)

        unknown = sorted(set(data) - CREATE_FIELDS)
        if unknown:
            raise ValidationError({k: "Not accepted when creating an enquiry." for k in unknown})

        missing = [f for f in REQUIRED_ON_CREATE if data.get(f) in (None, "")]
        if missing:
            raise ValidationError({f: "This field is required." for f in missing})

        if "current_status" in data:
            _validate_status(data["current_status"])
        else:
            data["current_status"] = EnquiryStatus.PENDING

        def _insert(seq: int, code: str) -> Enquiry:
            enquiry = Enquiry.objects.create(
                enquiry_seq=seq,
                enquiry_id=code,
                created_by_id=actor_user_id,
                **data,
            )
            AuditService.record(
                enquiry_id=enquiry.pk,
                user_id=actor_user_id,
                action=AuditAction.CREATED,
                description=f"Enquiry {code} created for client {enquiry.client_name}",
            )
            return enquiry

        enquiry = generator.allocate_enquiry(_insert)
        logger.info("Enquiry %s created by user %s", enquiry.enquiry_id, actor_user_id)

        publish(
            "enquiry.created",
            {
                "enquiry_pk": enquiry.pk,
                "enquiry_id": enquiry.enquiry_id,
                "client_name": enquiry.client_name,
                "actor_user_id": actor_user_id,
            },
        )
        return enquiry

    @staticmethod
    @store_guard
    def update(
        *,
        enquiry_id: int,
        data: dict,
        actor_user_id: int | None,
        generator: IdentifierGenerator | None = None,
    ) -> Enquiry:
        generator = generator or default_generator
        data = dict(data or {})

        _reject_immutable(data)

        unknown = sorted(set(data) - UPDATE_FIELDS)
        if unknown:
            raise ValidationError({k: "Unknown enquiry field." for k in unknown})

        if "current_status" in data:
            _validate_status(data["current_status"])

        for required in REQUIRED_ON_CREATE:
            if required in data and data[required] in (None, ""):
                raise ValidationError({required: "This field cannot be blank."})

        # Matter codes are minted under the generator's lock, held until commit.
        minting = data.get("conversion_date") is not None
        guard = generator.lock if minting else nullcontext()

        with guard, transaction.atomic():
            enquiry = _get_or_404(enquiry_id, for_update=True)

            if "follow_up_count" in data:
                new_count = data["follow_up_count"]
                if new_count is None or new_count < (enquiry.follow_up_count or 0):
                    raise ValidationError({"follow_up_count": "Follow-up count cannot decrease."})

            changes: list[tuple[str, object, object]] = []
            for field, value in data.items():
                old = getattr(enquiry, field)
                if old != value:
                    changes.append((field, old, value))
                    setattr(enquiry, field, value)

            minted_code = None
            if minting and not enquiry.matter_code:
                minted_code = generator.next_matter_code(data["conversion_date"], exclude_pk=enquiry.pk)
                enquiry.matter_code = minted_code

            if not changes and minted_code is None:
                return enquiry

            try:
                enquiry.save()
            except IntegrityError:
                raise ConflictError("Matter code already in use; retry the update.")

            EnquiryService._audit_changes(
                enquiry=enquiry,
                changes=changes,
                minted_code=minted_code,
                actor_user_id=actor_user_id,
            )

        EnquiryService._publish_changes(enquiry=enquiry, changes=changes, actor_user_id=actor_user_id)
        return enquiry

    @staticmethod
    def _audit_changes(*, enquiry: Enquiry, changes, minted_code, actor_user_id) -> None:
        for field, old, new in changes:
            if field == "current_status":
                description = f"Status changed from {old} to {new}"
                if old in TERMINAL_STATUSES:
                    description += " (reopened)"
                    logger.warning(
                        "Enquiry %s reopened: %s -> %s by user %s",
                        enquiry.enquiry_id,
                        old,
                        new,
                        actor_user_id,
                    )
                action = AuditAction.STATUS_CHANGED
            elif field in ASSIGNMENT_FIELDS:
                description = f"{field.replace('_', ' ').capitalize()} set to {new}"
                action = AuditAction.ASSIGNED
            else:
                description = None
                action = AuditAction.UPDATED

            AuditService.record(
                enquiry_id=enquiry.pk,
                user_id=actor_user_id,
                action=action,
                field_name=field,
                old_value=old,
                new_value=new,
                description=description,
            )

        if minted_code is not None:
            AuditService.record(
                enquiry_id=enquiry.pk,
                user_id=actor_user_id,
                action=AuditAction.UPDATED,
                field_name="matter_code",
                new_value=minted_code,
                description=f"Matter code {minted_code} assigned on conversion",
            )

    @staticmethod
    def _publish_changes(*, enquiry: Enquiry, changes, actor_user_id) -> None:
        for field, old, new in changes:
            if field == "current_status":
                publish(
                    "enquiry.status_changed",
                    {
                        "enquiry_pk": enquiry.pk,
                        "enquiry_id": enquiry.enquiry_id,
                        "client_name": enquiry.client_name,
                        "old_status": old,
                        "new_status": new,
                        "actor_user_id": actor_user_id,
                    },
                )
            elif field == "suggested_lead_lawyer" and new:
                publish(
                    "enquiry.assigned",
                    {
                        "enquiry_pk": enquiry.pk,
                        "enquiry_id": enquiry.enquiry_id,
                        "client_name": enquiry.client_name,
                        "lawyer_name": new,
                        "actor_user_id": actor_user_id,
                    },
                )

    @staticmethod
    @store_guard
    def delete(*, enquiry_id: int, actor_user_id: int | None) -> bool:
        """
        Remove an enquiry. Its audit trail goes with it; a payment row stays behind.
        """
        # Imported here: payments depends on enquiries.
        from crm_core.payments.models import Payment

        with transaction.atomic():
            enquiry = _get_or_404(enquiry_id, for_update=True)
            code = enquiry.enquiry_id

            if Payment.objects.filter(enquiry_id=enquiry.pk).exists():
                logger.warning("Enquiry %s deleted with a payment on record; payment retained", code)

            enquiry.delete()

        logger.info("Enquiry %s deleted by user %s", code, actor_user_id)
        publish("enquiry.deleted", {"enquiry_pk": enquiry_id, "enquiry_id": code, "actor_user_id": actor_user_id})
        return True
