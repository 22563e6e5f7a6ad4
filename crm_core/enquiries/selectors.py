# backend/crm_core/enquiries/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from crm_core.common.api.exceptions import NotFoundError
from crm_core.common.store import store_guard
from crm_core.enquiries.models import Enquiry


def list_enquiries() -> QuerySet[Enquiry]:
    return Enquiry.objects.select_related("created_by").order_by("-created_at", "-id")


@store_guard
def get_enquiry(enquiry_id: int) -> Enquiry:
    enquiry = Enquiry.objects.select_related("created_by").filter(pk=enquiry_id).first()
    if enquiry is None:
        raise NotFoundError(f"Enquiry {enquiry_id} not found.")
    return enquiry


def enquiries_by_status(status: str) -> QuerySet[Enquiry]:
    return list_enquiries().filter(current_status=status)
