# backend/crm_core/enquiries/metrics.py
from __future__ import annotations

import datetime
from decimal import Decimal

from django.db.models import Count, Sum
from django.utils import timezone

from crm_core.common.store import store_guard
from crm_core.enquiries.models import Enquiry, EnquiryStatus

ZERO = Decimal("0.00")

# Probability that an enquiry in this status turns into revenue.
# Statuses not listed (Declined, Conflict, Not Pursued) weigh 0.
FORECAST_WEIGHTS: dict[str, Decimal] = {
    EnquiryStatus.PENDING: Decimal("0.1"),
    EnquiryStatus.CONTACTED: Decimal("0.2"),
    EnquiryStatus.MEETING_SCHEDULED: Decimal("0.4"),
    EnquiryStatus.PROPOSAL_SENT: Decimal("0.6"),
    EnquiryStatus.CONVERTED: Decimal("1.0"),
}

_STATUS_ORDER = {value: i for i, value in enumerate(EnquiryStatus.values)}


def weight_for(status: str | None) -> Decimal:
    return FORECAST_WEIGHTS.get(status or "", Decimal("0"))


def _status_key(row: dict) -> tuple:
    status = row["status"]
    return (_STATUS_ORDER.get(status, len(_STATUS_ORDER)), status or "")


class MetricsEngine:
    """
    Read-side aggregates over the current enquiry set.
    Nothing is cached; each call re-reads the store.
    """

    @staticmethod
    @store_guard
    def status_summary() -> list[dict]:
        rows = (
            Enquiry.objects.order_by()
            .values("current_status")
            .annotate(count=Count("id"))
        )
        summary = [{"status": r["current_status"], "count": r["count"]} for r in rows]
        return sorted(summary, key=_status_key)

    @staticmethod
    @store_guard
    def kpi_metrics(*, today: datetime.date | None = None) -> dict:
        today = today or timezone.localdate()
        month_start = today.replace(day=1)

        total = Enquiry.objects.count()
        converted_qs = Enquiry.objects.filter(current_status=EnquiryStatus.CONVERTED)
        converted = converted_qs.count()
        this_month = Enquiry.objects.filter(date_of_enquiry__gte=month_start).count()
        revenue = converted_qs.aggregate(total=Sum("proposal_value"))["total"] or ZERO

        conversion_rate = (Decimal(converted) / Decimal(total) * 100) if total else Decimal("0")

        return {
            "total_enquiries": total,
            "converted_enquiries": converted,
            "conversion_rate": float(conversion_rate),
            "this_month_enquiries": this_month,
            "total_revenue": revenue,
        }

    @staticmethod
    @store_guard
    def pipeline_forecast() -> list[dict]:
        rows = (
            Enquiry.objects.order_by()
            .values("current_status")
            .annotate(count=Count("id"), total_value=Sum("proposal_value"))
        )

        forecast = []
        for r in rows:
            total_value = r["total_value"] or ZERO
            probability = weight_for(r["current_status"])
            forecast.append(
                {
                    "status": r["current_status"],
                    "count": r["count"],
                    "total_value": total_value,
                    "probability": probability,
                    "weighted_value": total_value * probability,
                }
            )
        return sorted(forecast, key=_status_key)
