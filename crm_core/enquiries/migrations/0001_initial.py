from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


STATUS_CHOICES = [
    ("Pending", "Pending"),
    ("Contacted", "Contacted"),
    ("Meeting Scheduled", "Meeting Scheduled"),
    ("Proposal Sent", "Proposal Sent"),
    ("Converted", "Converted"),
    ("Declined", "Declined"),
    ("Conflict", "Conflict"),
    ("Not Pursued", "Not Pursued"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Enquiry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("enquiry_id", models.CharField(editable=False, max_length=20, unique=True)),
                ("enquiry_seq", models.PositiveIntegerField(editable=False, unique=True)),
                ("date_of_enquiry", models.DateField(db_index=True)),
                ("time", models.CharField(blank=True, max_length=10, null=True)),
                ("communication_channel", models.CharField(blank=True, max_length=50, null=True)),
                ("received_by", models.CharField(blank=True, max_length=100, null=True)),
                ("client_name", models.CharField(max_length=255)),
                ("client_type", models.CharField(blank=True, max_length=50, null=True)),
                ("nationality", models.CharField(blank=True, max_length=100, null=True)),
                ("email", models.EmailField(blank=True, max_length=320, null=True)),
                ("phone_number", models.CharField(blank=True, max_length=50, null=True)),
                ("preferred_contact_method", models.CharField(blank=True, max_length=50, null=True)),
                ("language_preference", models.CharField(blank=True, max_length=50, null=True)),
                ("service_requested", models.CharField(blank=True, max_length=255, null=True)),
                ("short_description", models.TextField(blank=True, null=True)),
                ("urgency_level", models.CharField(blank=True, max_length=20, null=True)),
                ("client_budget", models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ("potential_value_range", models.CharField(blank=True, max_length=50, null=True)),
                ("expected_timeline", models.CharField(blank=True, max_length=100, null=True)),
                ("referral_source_name", models.CharField(blank=True, max_length=255, null=True)),
                ("competitor_involvement", models.CharField(blank=True, max_length=20, null=True)),
                ("competitor_name", models.CharField(blank=True, max_length=255, null=True)),
                ("assigned_department", models.CharField(blank=True, max_length=100, null=True)),
                ("suggested_lead_lawyer", models.CharField(blank=True, max_length=100, null=True)),
                ("current_status", models.CharField(choices=STATUS_CHOICES, db_index=True, default="Pending", max_length=50)),
                ("next_action", models.TextField(blank=True, null=True)),
                ("deadline", models.DateField(blank=True, null=True)),
                ("first_response_date", models.DateField(blank=True, null=True)),
                ("first_response_time_hours", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("meeting_date", models.DateField(blank=True, null=True)),
                ("proposal_sent_date", models.DateField(blank=True, null=True)),
                ("proposal_value", models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ("follow_up_count", models.PositiveIntegerField(default=0)),
                ("last_contact_date", models.DateField(blank=True, null=True)),
                ("conversion_date", models.DateField(blank=True, db_index=True, null=True)),
                ("engagement_letter_date", models.DateField(blank=True, null=True)),
                ("matter_code", models.CharField(blank=True, max_length=20, null=True, unique=True)),
                ("payment_status", models.CharField(blank=True, max_length=50, null=True)),
                ("invoice_number", models.CharField(blank=True, max_length=100, null=True)),
                ("lost_reason", models.TextField(blank=True, null=True)),
                ("internal_notes", models.TextField(blank=True, null=True)),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="enquiries_created", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "enquiries_enquiry",
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["current_status", "date_of_enquiry"], name="enquiries_e_current_4b7a1d_idx")],
            },
        ),
    ]
