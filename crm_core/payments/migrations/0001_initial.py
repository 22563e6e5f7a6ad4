from decimal import Decimal

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("enquiries", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("matter_code", models.CharField(db_index=True, max_length=20)),
                ("payment_terms", models.TextField(blank=True, null=True)),
                ("payment_status", models.CharField(db_index=True, default="Not Started", max_length=50)),
                ("total_amount", models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ("amount_paid", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=15)),
                ("amount_outstanding", models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ("retainer_paid_date", models.DateField(blank=True, null=True)),
                ("retainer_amount", models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ("mid_payment_date", models.DateField(blank=True, null=True)),
                ("mid_payment_amount", models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ("final_payment_date", models.DateField(blank=True, null=True)),
                ("final_payment_amount", models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ("payment_notes", models.TextField(blank=True, null=True)),
                ("enquiry", models.OneToOneField(db_constraint=False, on_delete=django.db.models.deletion.DO_NOTHING, related_name="payment", to="enquiries.enquiry")),
            ],
            options={
                "db_table": "payments_payment",
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]
