# backend/crm_core/conftest.py
import datetime

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from crm_core.iam.models import UserRole
from crm_core.tests.helpers import set_role


@pytest.fixture
def user(db):
    """
    Plain practice account (role=user). Profile comes from the post_save signal.
    """
    return get_user_model().objects.create_user(
        username="lawyer",
        password="testpass",
        first_name="Layla",
        last_name="Haddad",
        email="layla@example.com",
    )


@pytest.fixture
def admin(db):
    admin = get_user_model().objects.create_user(
        username="partner",
        password="testpass",
        first_name="Omar",
        last_name="Khalil",
        email="omar@example.com",
    )
    return set_role(admin, UserRole.ADMIN)


@pytest.fixture
def api_client(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.fixture
def admin_api_client(admin):
    c = APIClient()
    c.force_authenticate(user=admin)
    return c


@pytest.fixture
def make_enquiry(user):
    """
    Create enquiries through EnquiryService so ids, audit and events behave as in production.
    """
    from crm_core.enquiries.services import CREATE_FIELDS, EnquiryService

    def _make(actor=None, **fields):
        actor_id = (actor or user).id
        data = {
            "date_of_enquiry": datetime.date(2025, 1, 10),
            "client_name": "Acme",
        }
        data.update({k: v for k, v in fields.items() if k in CREATE_FIELDS})
        enquiry = EnquiryService.create(data=data, actor_user_id=actor_id)

        # Fields not accepted at intake (proposal_value, conversion_date, ...) go through update
        later = {k: v for k, v in fields.items() if k not in CREATE_FIELDS}
        if later:
            enquiry = EnquiryService.update(enquiry_id=enquiry.pk, data=later, actor_user_id=actor_id)
        return enquiry

    return _make
