# backend/crm_core/audit/admin.py
from django.contrib import admin

from crm_core.audit.models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ("enquiry", "action", "field_name", "user", "created_at")
    list_filter = ("action",)
    search_fields = ("enquiry__enquiry_id", "field_name", "description")
    readonly_fields = [f.name for f in AuditLog._meta.fields]
    ordering = ("-created_at",)

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
