# backend/crm_core/payments/models.py
from decimal import Decimal

from django.db import models

from crm_core.common.models import TimeStampedModel

NOT_STARTED = "Not Started"


class Payment(TimeStampedModel):
    """
    Payment schedule for a converted enquiry (one per enquiry).

    The link to the enquiry carries no database constraint: deleting an
    enquiry leaves its payment row in place.
    """
    enquiry = models.OneToOneField(
        "enquiries.Enquiry",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="payment",
    )
    matter_code = models.CharField(max_length=20, db_index=True)

    payment_terms = models.TextField(null=True, blank=True)

    payment_status = models.CharField(max_length=50, default=NOT_STARTED, db_index=True)
    total_amount = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)
    amount_paid = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    amount_outstanding = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)

    # Milestones
    retainer_paid_date = models.DateField(null=True, blank=True)
    retainer_amount = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)
    mid_payment_date = models.DateField(null=True, blank=True)
    mid_payment_amount = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)
    final_payment_date = models.DateField(null=True, blank=True)
    final_payment_amount = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)

    payment_notes = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "payments_payment"
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"{self.matter_code} ({self.payment_status})"

    def recompute_outstanding(self) -> None:
        if self.total_amount is not None:
            self.amount_outstanding = (self.total_amount - (self.amount_paid or Decimal("0.00"))).quantize(Decimal("0.01"))
