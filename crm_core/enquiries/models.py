# backend/crm_core/enquiries/models.py
from django.conf import settings
from django.db import models

from crm_core.common.models import TimeStampedModel


class EnquiryStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    CONTACTED = "Contacted", "Contacted"
    MEETING_SCHEDULED = "Meeting Scheduled", "Meeting Scheduled"
    PROPOSAL_SENT = "Proposal Sent", "Proposal Sent"
    CONVERTED = "Converted", "Converted"
    DECLINED = "Declined", "Declined"
    CONFLICT = "Conflict", "Conflict"
    NOT_PURSUED = "Not Pursued", "Not Pursued"


# Statuses an enquiry normally does not leave. Leaving them is allowed but flagged.
TERMINAL_STATUSES = frozenset({
    EnquiryStatus.CONVERTED,
    EnquiryStatus.DECLINED,
    EnquiryStatus.NOT_PURSUED,
})


class Enquiry(TimeStampedModel):
    """
    A client enquiry tracked from first contact to conversion into a matter.

    enquiry_id (ENQ-0001) is derived from enquiry_seq and never changes.
    matter_code (MAT-2025-001) is minted once, when conversion_date is first set.
    """
    enquiry_id = models.CharField(max_length=20, unique=True, editable=False)
    enquiry_seq = models.PositiveIntegerField(unique=True, editable=False)

    # Basic enquiry info
    date_of_enquiry = models.DateField(db_index=True)
    time = models.CharField(max_length=10, null=True, blank=True)
    communication_channel = models.CharField(max_length=50, null=True, blank=True)
    received_by = models.CharField(max_length=100, null=True, blank=True)

    # Client details
    client_name = models.CharField(max_length=255)
    client_type = models.CharField(max_length=50, null=True, blank=True)
    nationality = models.CharField(max_length=100, null=True, blank=True)
    email = models.EmailField(max_length=320, null=True, blank=True)
    phone_number = models.CharField(max_length=50, null=True, blank=True)
    preferred_contact_method = models.CharField(max_length=50, null=True, blank=True)
    language_preference = models.CharField(max_length=50, null=True, blank=True)

    # Service details
    service_requested = models.CharField(max_length=255, null=True, blank=True)
    short_description = models.TextField(null=True, blank=True)
    urgency_level = models.CharField(max_length=20, null=True, blank=True)
    client_budget = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)
    potential_value_range = models.CharField(max_length=50, null=True, blank=True)
    expected_timeline = models.CharField(max_length=100, null=True, blank=True)

    # Referral and competition
    referral_source_name = models.CharField(max_length=255, null=True, blank=True)
    competitor_involvement = models.CharField(max_length=20, null=True, blank=True)
    competitor_name = models.CharField(max_length=255, null=True, blank=True)

    # Assignment
    assigned_department = models.CharField(max_length=100, null=True, blank=True)
    suggested_lead_lawyer = models.CharField(max_length=100, null=True, blank=True)

    # Status tracking
    current_status = models.CharField(
        max_length=50,
        choices=EnquiryStatus.choices,
        default=EnquiryStatus.PENDING,
        db_index=True,
    )
    next_action = models.TextField(null=True, blank=True)
    deadline = models.DateField(null=True, blank=True)

    # Response tracking
    first_response_date = models.DateField(null=True, blank=True)
    first_response_time_hours = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    meeting_date = models.DateField(null=True, blank=True)
    proposal_sent_date = models.DateField(null=True, blank=True)
    proposal_value = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)
    follow_up_count = models.PositiveIntegerField(default=0)
    last_contact_date = models.DateField(null=True, blank=True)

    # Conversion
    conversion_date = models.DateField(null=True, blank=True, db_index=True)
    engagement_letter_date = models.DateField(null=True, blank=True)
    matter_code = models.CharField(max_length=20, null=True, blank=True, unique=True)

    # Payment
    payment_status = models.CharField(max_length=50, null=True, blank=True)
    invoice_number = models.CharField(max_length=100, null=True, blank=True)

    lost_reason = models.TextField(null=True, blank=True)
    internal_notes = models.TextField(null=True, blank=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="enquiries_created",
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "enquiries_enquiry"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["current_status", "date_of_enquiry"], name="enquiries_e_current_4b7a1d_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.enquiry_id} {self.client_name}"

    @property
    def is_terminal(self) -> bool:
        return self.current_status in TERMINAL_STATUSES
