# backend/crm_core/audit/models.py
from django.conf import settings
from django.db import models


class AuditAction(models.TextChoices):
    CREATED = "created", "Created"
    UPDATED = "updated", "Updated"
    DELETED = "deleted", "Deleted"
    STATUS_CHANGED = "status_changed", "Status changed"
    ASSIGNED = "assigned", "Assigned"


class AuditLogImmutable(Exception):
    pass


class AuditLog(models.Model):
    """
    Immutable change record for one enquiry.
    Rows go away only with their enquiry (cascade); they are never edited.
    """
    enquiry = models.ForeignKey(
        "enquiries.Enquiry",
        on_delete=models.CASCADE,
        related_name="audit_logs",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="audit_logs",
        null=True,
        blank=True,
    )

    action = models.CharField(max_length=32, choices=AuditAction.choices, db_index=True)
    field_name = models.CharField(max_length=100, null=True, blank=True)
    old_value = models.TextField(null=True, blank=True)
    new_value = models.TextField(null=True, blank=True)
    description = models.TextField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "audit_log"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["enquiry", "created_at"], name="audit_log_enquiry_7e2c51_idx"),
            models.Index(fields=["user", "created_at"], name="audit_log_user_id_3f9a0b_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.action} enquiry={self.enquiry_id} by={self.user_id}"

    def save(self, *args, **kwargs):
        if self.pk is not None and not self._state.adding:
            raise AuditLogImmutable("Audit log entries cannot be modified.")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise AuditLogImmutable("Audit log entries cannot be deleted individually.")
