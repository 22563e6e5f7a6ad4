# backend/crm_core/enquiries/tests/test_enquiry_lifecycle.py
import datetime
from decimal import Decimal

import pytest
from rest_framework.exceptions import ValidationError

from crm_core.audit.models import AuditAction, AuditLog
from crm_core.common.api.exceptions import NotFoundError
from crm_core.enquiries.models import Enquiry, EnquiryStatus
from crm_core.enquiries.selectors import enquiries_by_status, get_enquiry
from crm_core.enquiries.services import EnquiryService
from crm_core.payments.models import Payment
from crm_core.payments.services import PaymentService

pytestmark = pytest.mark.django_db


def _convert(enquiry, user, on):
    return EnquiryService.update(
        enquiry_id=enquiry.pk,
        data={"current_status": EnquiryStatus.CONVERTED, "conversion_date": on},
        actor_user_id=user.id,
    )


def test_create_assigns_sequential_ids_and_pending_status(make_enquiry, user):
    first = make_enquiry(client_name="Acme")
    second = make_enquiry(client_name="Globex")

    assert first.enquiry_id == "ENQ-0001"
    assert second.enquiry_id == "ENQ-0002"
    assert first.current_status == EnquiryStatus.PENDING
    assert first.matter_code is None
    assert first.created_by_id == user.id

    log = AuditLog.objects.get(enquiry=first)
    assert log.action == AuditAction.CREATED
    assert log.user_id == user.id
    assert log.description == "Enquiry ENQ-0001 created for client Acme"


def test_matter_codes_follow_conversions_per_year(make_enquiry, user):
    a = _convert(make_enquiry(), user, datetime.date(2025, 3, 1))
    b = _convert(make_enquiry(), user, datetime.date(2025, 4, 1))
    c = _convert(make_enquiry(), user, datetime.date(2024, 11, 5))

    assert a.matter_code == "MAT-2025-001"
    assert b.matter_code == "MAT-2025-002"
    assert c.matter_code == "MAT-2024-001"

    # One 2025 conversion left but MAT-2025-002 is still held; the next code skips past it
    EnquiryService.delete(enquiry_id=a.pk, actor_user_id=user.id)
    d = _convert(make_enquiry(), user, datetime.date(2025, 6, 1))
    assert d.matter_code == "MAT-2025-003"


def test_matter_code_never_changes_once_minted(make_enquiry, user):
    e = _convert(make_enquiry(), user, datetime.date(2025, 3, 1))

    e = EnquiryService.update(
        enquiry_id=e.pk,
        data={"conversion_date": datetime.date(2026, 1, 2)},
        actor_user_id=user.id,
    )
    assert e.matter_code == "MAT-2025-001"
    assert e.conversion_date == datetime.date(2026, 1, 2)

    with pytest.raises(ValidationError):
        EnquiryService.update(enquiry_id=e.pk, data={"matter_code": "MAT-2030-999"}, actor_user_id=user.id)

    e.refresh_from_db()
    assert e.matter_code == "MAT-2025-001"


def test_update_rejects_system_fields_and_bad_values(make_enquiry, user):
    e = make_enquiry()

    for data in (
        {"enquiry_id": "ENQ-9999"},
        {"current_status": "Won"},
        {"current_status": None},
        {"client_name": ""},
        {"favourite_colour": "blue"},
    ):
        with pytest.raises(ValidationError):
            EnquiryService.update(enquiry_id=e.pk, data=data, actor_user_id=user.id)

    e.refresh_from_db()
    assert e.enquiry_id == "ENQ-0001"
    assert e.current_status == EnquiryStatus.PENDING
    assert AuditLog.objects.filter(enquiry=e).count() == 1


def test_follow_up_count_cannot_decrease(make_enquiry, user):
    e = make_enquiry()
    EnquiryService.update(enquiry_id=e.pk, data={"follow_up_count": 3}, actor_user_id=user.id)

    with pytest.raises(ValidationError):
        EnquiryService.update(enquiry_id=e.pk, data={"follow_up_count": 2}, actor_user_id=user.id)

    e.refresh_from_db()
    assert e.follow_up_count == 3


def test_create_rejects_missing_required_and_system_fields(user):
    with pytest.raises(ValidationError):
        EnquiryService.create(data={"client_name": "Acme"}, actor_user_id=user.id)
    with pytest.raises(ValidationError):
        EnquiryService.create(
            data={"date_of_enquiry": datetime.date(2025, 1, 1), "client_name": "Acme", "matter_code": "MAT-2025-001"},
            actor_user_id=user.id,
        )
    with pytest.raises(ValidationError):
        EnquiryService.create(
            data={"date_of_enquiry": datetime.date(2025, 1, 1), "client_name": "Acme", "current_status": "Won"},
            actor_user_id=user.id,
        )
    assert Enquiry.objects.count() == 0


def test_update_writes_one_audit_entry_per_changed_field(make_enquiry, user):
    e = make_enquiry()

    EnquiryService.update(
        enquiry_id=e.pk,
        data={
            "current_status": EnquiryStatus.CONTACTED,
            "suggested_lead_lawyer": "Layla Haddad",
            "internal_notes": "Called back",
            "client_name": "Acme",  # unchanged
        },
        actor_user_id=user.id,
    )

    logs = {log.field_name: log for log in AuditLog.objects.filter(enquiry=e).exclude(action=AuditAction.CREATED)}
    assert set(logs) == {"current_status", "suggested_lead_lawyer", "internal_notes"}

    assert logs["current_status"].action == AuditAction.STATUS_CHANGED
    assert logs["current_status"].old_value == "Pending"
    assert logs["current_status"].new_value == "Contacted"
    assert logs["suggested_lead_lawyer"].action == AuditAction.ASSIGNED
    assert logs["internal_notes"].action == AuditAction.UPDATED
    assert logs["internal_notes"].old_value is None


def test_conversion_audits_the_minted_matter_code(make_enquiry, user):
    e = _convert(make_enquiry(), user, datetime.date(2025, 3, 1))

    log = AuditLog.objects.get(enquiry=e, field_name="matter_code")
    assert log.action == AuditAction.UPDATED
    assert log.new_value == "MAT-2025-001"

    date_log = AuditLog.objects.get(enquiry=e, field_name="conversion_date")
    assert date_log.new_value == "2025-03-01"


def test_leaving_a_terminal_status_is_allowed_but_flagged(make_enquiry, user):
    e = make_enquiry(current_status=EnquiryStatus.DECLINED)
    assert e.is_terminal

    e = EnquiryService.update(
        enquiry_id=e.pk,
        data={"current_status": EnquiryStatus.CONTACTED},
        actor_user_id=user.id,
    )
    assert e.current_status == EnquiryStatus.CONTACTED

    log = AuditLog.objects.get(enquiry=e, action=AuditAction.STATUS_CHANGED)
    assert log.description.endswith("(reopened)")


def test_noop_update_writes_nothing(make_enquiry, user):
    e = make_enquiry(internal_notes="x")
    EnquiryService.update(enquiry_id=e.pk, data={"internal_notes": "x"}, actor_user_id=user.id)
    assert AuditLog.objects.filter(enquiry=e).count() == 1


def test_missing_enquiry_is_not_found(user):
    with pytest.raises(NotFoundError):
        EnquiryService.update(enquiry_id=999, data={"internal_notes": "x"}, actor_user_id=user.id)
    with pytest.raises(NotFoundError):
        EnquiryService.delete(enquiry_id=999, actor_user_id=user.id)


def test_delete_cascades_audit_and_keeps_payment(make_enquiry, user):
    e = _convert(make_enquiry(proposal_value=Decimal("1000.00")), user, datetime.date(2025, 3, 1))
    pay = PaymentService.create(
        enquiry_id=e.pk,
        data={"total_amount": Decimal("1000.00"), "amount_paid": Decimal("250.00")},
        actor_user_id=user.id,
    )
    assert AuditLog.objects.filter(enquiry_id=e.pk).exists()

    assert EnquiryService.delete(enquiry_id=e.pk, actor_user_id=user.id) is True

    assert not Enquiry.objects.filter(pk=e.pk).exists()
    assert not AuditLog.objects.filter(enquiry_id=e.pk).exists()

    orphan = Payment.objects.get(pk=pay.pk)
    assert orphan.enquiry_id == e.pk
    assert orphan.matter_code == "MAT-2025-001"


def test_enquiry_id_follows_highest_remaining_sequence(make_enquiry, user):
    make_enquiry()
    latest = make_enquiry()
    EnquiryService.delete(enquiry_id=latest.pk, actor_user_id=user.id)

    # Numbering is one past the highest id still on record
    assert make_enquiry().enquiry_id == "ENQ-0002"


def test_selectors(make_enquiry):
    a = make_enquiry(current_status=EnquiryStatus.CONTACTED)
    make_enquiry()

    assert [e.pk for e in enquiries_by_status(EnquiryStatus.CONTACTED)] == [a.pk]
    assert get_enquiry(a.pk).enquiry_id == "ENQ-0001"
    with pytest.raises(NotFoundError):
        get_enquiry(999)
