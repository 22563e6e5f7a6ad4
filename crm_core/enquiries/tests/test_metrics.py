# backend/crm_core/enquiries/tests/test_metrics.py
import datetime
from decimal import Decimal

import pytest

from crm_core.enquiries.metrics import FORECAST_WEIGHTS, MetricsEngine, weight_for
from crm_core.enquiries.models import EnquiryStatus

pytestmark = pytest.mark.django_db


def test_empty_store_yields_zeroes_not_errors():
    assert MetricsEngine.status_summary() == []
    assert MetricsEngine.pipeline_forecast() == []

    kpi = MetricsEngine.kpi_metrics(today=datetime.date(2025, 5, 15))
    assert kpi["total_enquiries"] == 0
    assert kpi["converted_enquiries"] == 0
    assert kpi["conversion_rate"] == 0
    assert kpi["this_month_enquiries"] == 0
    assert kpi["total_revenue"] == Decimal("0")


def test_forecast_weights():
    assert weight_for(EnquiryStatus.PENDING) == Decimal("0.1")
    assert weight_for(EnquiryStatus.CONTACTED) == Decimal("0.2")
    assert weight_for(EnquiryStatus.MEETING_SCHEDULED) == Decimal("0.4")
    assert weight_for(EnquiryStatus.PROPOSAL_SENT) == Decimal("0.6")
    assert weight_for(EnquiryStatus.CONVERTED) == Decimal("1.0")

    for status in (EnquiryStatus.DECLINED, EnquiryStatus.CONFLICT, EnquiryStatus.NOT_PURSUED, None):
        assert weight_for(status) == 0
        assert status not in FORECAST_WEIGHTS


def test_status_summary_counts_in_pipeline_order(make_enquiry):
    make_enquiry(current_status=EnquiryStatus.CONVERTED)
    make_enquiry()
    make_enquiry()
    make_enquiry(current_status=EnquiryStatus.CONTACTED)

    assert MetricsEngine.status_summary() == [
        {"status": "Pending", "count": 2},
        {"status": "Contacted", "count": 1},
        {"status": "Converted", "count": 1},
    ]


def test_kpi_metrics(make_enquiry):
    make_enquiry(date_of_enquiry=datetime.date(2025, 5, 2), current_status=EnquiryStatus.CONVERTED, proposal_value=Decimal("5000.00"))
    make_enquiry(date_of_enquiry=datetime.date(2025, 5, 20), current_status=EnquiryStatus.CONVERTED)
    make_enquiry(date_of_enquiry=datetime.date(2025, 4, 30), proposal_value=Decimal("9999.00"))
    make_enquiry(date_of_enquiry=datetime.date(2025, 3, 1))

    kpi = MetricsEngine.kpi_metrics(today=datetime.date(2025, 5, 15))

    assert kpi["total_enquiries"] == 4
    assert kpi["converted_enquiries"] == 2
    assert kpi["conversion_rate"] == pytest.approx(50.0)
    # Enquiries dated on or after the first of the month, future-dated included
    assert kpi["this_month_enquiries"] == 2
    # Only converted enquiries count as revenue; missing values are zero
    assert kpi["total_revenue"] == Decimal("5000.00")


def test_pipeline_forecast_weights_each_status(make_enquiry):
    make_enquiry(current_status=EnquiryStatus.PROPOSAL_SENT, proposal_value=Decimal("1000.00"))
    make_enquiry(current_status=EnquiryStatus.PROPOSAL_SENT, proposal_value=Decimal("500.00"))
    make_enquiry(current_status=EnquiryStatus.PROPOSAL_SENT)
    make_enquiry(current_status=EnquiryStatus.DECLINED, proposal_value=Decimal("800.00"))

    rows = {r["status"]: r for r in MetricsEngine.pipeline_forecast()}
    assert list(rows) == ["Proposal Sent", "Declined"]

    sent = rows["Proposal Sent"]
    assert sent["count"] == 3
    assert sent["total_value"] == Decimal("1500.00")
    assert sent["probability"] == Decimal("0.6")
    assert sent["weighted_value"] == Decimal("900")

    declined = rows["Declined"]
    assert declined["total_value"] == Decimal("800.00")
    assert declined["weighted_value"] == 0
