from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("channel", models.CharField(choices=[("in_app", "In App"), ("email", "Email")], db_index=True, default="in_app", max_length=16)),
                ("title", models.CharField(max_length=255)),
                ("body", models.TextField(blank=True, default="")),
                ("event", models.CharField(db_index=True, max_length=64)),
                ("enquiry_pk", models.BigIntegerField(blank=True, db_index=True, null=True)),
                ("enquiry_code", models.CharField(blank=True, default="", max_length=20)),
                ("is_read", models.BooleanField(db_index=True, default=False)),
                ("read_at", models.DateTimeField(blank=True, null=True)),
                ("meta", models.JSONField(blank=True, default=dict)),
                ("recipient", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "notifications_notification",
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["recipient", "channel", "is_read"], name="notificatio_recipie_5d8e2a_idx")],
            },
        ),
    ]
