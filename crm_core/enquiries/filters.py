# backend/crm_core/enquiries/filters.py
from __future__ import annotations

import django_filters
from django.db.models import Q

from crm_core.enquiries.models import Enquiry, EnquiryStatus


class EnquiryFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(field_name="current_status", choices=EnquiryStatus.choices)
    date_from = django_filters.DateFilter(field_name="date_of_enquiry", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="date_of_enquiry", lookup_expr="lte")
    department = django_filters.CharFilter(field_name="assigned_department", lookup_expr="iexact")
    lawyer = django_filters.CharFilter(field_name="suggested_lead_lawyer", lookup_expr="iexact")
    converted = django_filters.BooleanFilter(field_name="matter_code", lookup_expr="isnull", exclude=True)
    q = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Enquiry
        fields = ["status", "date_from", "date_to", "department", "lawyer", "converted", "q"]

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(enquiry_id__icontains=value)
            | Q(client_name__icontains=value)
            | Q(email__icontains=value)
            | Q(matter_code__icontains=value)
            | Q(service_requested__icontains=value)
        )
