# backend/crm_core/payments/tests/test_payments.py
import datetime
from decimal import Decimal

import pytest
from rest_framework.exceptions import ValidationError

from crm_core.audit.models import AuditLog
from crm_core.common.api.exceptions import ConflictError, NotFoundError
from crm_core.enquiries.services import EnquiryService
from crm_core.payments.models import NOT_STARTED, Payment
from crm_core.payments.services import PaymentService

pytestmark = pytest.mark.django_db


@pytest.fixture
def converted(make_enquiry, user):
    e = make_enquiry()
    return EnquiryService.update(
        enquiry_id=e.pk,
        data={"current_status": "Converted", "conversion_date": datetime.date(2025, 3, 1)},
        actor_user_id=user.id,
    )


def test_payment_needs_a_matter_code(make_enquiry, user):
    e = make_enquiry()
    with pytest.raises(ValidationError):
        PaymentService.create(enquiry_id=e.pk, data={}, actor_user_id=user.id)
    assert Payment.objects.count() == 0


def test_payment_for_missing_enquiry(user):
    with pytest.raises(NotFoundError):
        PaymentService.create(enquiry_id=999, data={}, actor_user_id=user.id)


def test_create_copies_matter_code_and_computes_outstanding(converted, user):
    pay = PaymentService.create(
        enquiry_id=converted.pk,
        data={"total_amount": Decimal("10000.00"), "amount_paid": Decimal("2500.00"), "payment_terms": "50/50"},
        actor_user_id=user.id,
    )
    assert pay.matter_code == "MAT-2025-001"
    assert pay.payment_status == NOT_STARTED
    assert pay.amount_outstanding == Decimal("7500.00")

    log = AuditLog.objects.get(enquiry=converted, field_name="payment")
    assert log.description == "Payment record created for matter MAT-2025-001"


def test_one_payment_per_enquiry(converted, user):
    PaymentService.create(enquiry_id=converted.pk, data={}, actor_user_id=user.id)
    with pytest.raises(ConflictError):
        PaymentService.create(enquiry_id=converted.pk, data={}, actor_user_id=user.id)


def test_mismatched_matter_code_rejected(converted, user):
    with pytest.raises(ValidationError):
        PaymentService.create(enquiry_id=converted.pk, matter_code="MAT-2019-001", data={}, actor_user_id=user.id)


def test_negative_amounts_rejected(converted, user):
    with pytest.raises(ValidationError):
        PaymentService.create(enquiry_id=converted.pk, data={"amount_paid": Decimal("-1")}, actor_user_id=user.id)


def test_update_recomputes_outstanding_and_audits(converted, user):
    pay = PaymentService.create(enquiry_id=converted.pk, data={"total_amount": Decimal("900.00")}, actor_user_id=user.id)

    pay = PaymentService.update(
        payment_id=pay.pk,
        data={"amount_paid": Decimal("300.00"), "payment_status": "Partially Paid"},
        actor_user_id=user.id,
    )
    assert pay.amount_outstanding == Decimal("600.00")
    assert AuditLog.objects.filter(enquiry=converted, field_name="payment").count() == 2

    with pytest.raises(NotFoundError):
        PaymentService.update(payment_id=999, data={}, actor_user_id=user.id)


def test_orphan_payment_can_still_be_updated(converted, user):
    pay = PaymentService.create(enquiry_id=converted.pk, data={"total_amount": Decimal("100.00")}, actor_user_id=user.id)
    EnquiryService.delete(enquiry_id=converted.pk, actor_user_id=user.id)

    pay = PaymentService.update(payment_id=pay.pk, data={"amount_paid": Decimal("100.00")}, actor_user_id=user.id)
    assert pay.amount_outstanding == Decimal("0.00")
    assert AuditLog.objects.count() == 0


def test_payments_api(api_client, converted):
    res = api_client.post(
        "/api/v1/payments/",
        {"enquiry_id": converted.pk, "total_amount": "5000.00", "amount_paid": "1000.00"},
        format="json",
    )
    assert res.status_code == 201, res.content
    body = res.json()
    assert body["matter_code"] == "MAT-2025-001"
    assert body["amount_outstanding"] == "4000.00"

    res = api_client.post("/api/v1/payments/", {"enquiry_id": converted.pk}, format="json")
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "conflict"

    res = api_client.patch(f"/api/v1/payments/{body['id']}/", {"amount_paid": "5000.00"}, format="json")
    assert res.status_code == 200
    assert res.json()["amount_outstanding"] == "0.00"

    res = api_client.get(f"/api/v1/payments/by-enquiry/{converted.pk}/")
    assert res.status_code == 200
    assert res.json()["id"] == body["id"]

    res = api_client.get("/api/v1/payments/")
    assert res.status_code == 200
    assert res.json()["count"] == 1


def test_by_enquiry_without_payment_is_404(api_client, make_enquiry):
    e = make_enquiry()
    res = api_client.get(f"/api/v1/payments/by-enquiry/{e.pk}/")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "not_found"


def test_api_rejects_unconverted_enquiry(api_client, make_enquiry):
    e = make_enquiry()
    res = api_client.post("/api/v1/payments/", {"enquiry_id": e.pk}, format="json")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "validation_error"
