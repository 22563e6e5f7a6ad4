# backend/crm_core/iam/models.py
from django.conf import settings
from django.db import models


class UserRole(models.TextChoices):
    USER = "user", "User"
    ADMIN = "admin", "Admin"


class AccountStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    INACTIVE = "inactive", "Inactive"
    SUSPENDED = "suspended", "Suspended"


class NotificationMethod(models.TextChoices):
    IN_APP = "in_app", "In App"
    EMAIL = "email", "Email"
    BOTH = "both", "Both"


class EmailNotifications(models.TextChoices):
    ENABLED = "enabled", "Enabled"
    DISABLED = "disabled", "Disabled"


class UserProfile(models.Model):
    """
    CRM profile anchored to Django's AUTH_USER_MODEL.
    Holds the practice role and account status consulted by the access gate.
    """
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="crm_profile")

    role = models.CharField(max_length=16, choices=UserRole.choices, default=UserRole.USER, db_index=True)
    status = models.CharField(max_length=16, choices=AccountStatus.choices, default=AccountStatus.ACTIVE, db_index=True)

    notification_method = models.CharField(
        max_length=16,
        choices=NotificationMethod.choices,
        default=NotificationMethod.IN_APP,
    )
    email_notifications = models.CharField(
        max_length=16,
        choices=EmailNotifications.choices,
        default=EmailNotifications.ENABLED,
    )

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "iam_user_profile"
        indexes = [
            models.Index(fields=["role", "status"], name="iam_user_pr_role_9c1f3e_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.user.get_username()} ({self.role})"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_active_account(self) -> bool:
        return self.status == AccountStatus.ACTIVE

    @property
    def wants_email(self) -> bool:
        return (
            self.email_notifications == EmailNotifications.ENABLED
            and self.notification_method in {NotificationMethod.EMAIL, NotificationMethod.BOTH}
        )

    @property
    def wants_in_app(self) -> bool:
        return self.notification_method in {NotificationMethod.IN_APP, NotificationMethod.BOTH}
