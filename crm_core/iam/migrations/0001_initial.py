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
            name="UserProfile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("role", models.CharField(choices=[("user", "User"), ("admin", "Admin")], db_index=True, default="user", max_length=16)),
                ("status", models.CharField(choices=[("active", "Active"), ("inactive", "Inactive"), ("suspended", "Suspended")], db_index=True, default="active", max_length=16)),
                ("notification_method", models.CharField(choices=[("in_app", "In App"), ("email", "Email"), ("both", "Both")], default="in_app", max_length=16)),
                ("email_notifications", models.CharField(choices=[("enabled", "Enabled"), ("disabled", "Disabled")], default="enabled", max_length=16)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="crm_profile", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "iam_user_profile",
                "indexes": [models.Index(fields=["role", "status"], name="iam_user_pr_role_9c1f3e_idx")],
            },
        ),
    ]
