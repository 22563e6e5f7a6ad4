# backend/crm_core/enquiries/admin.py
from django.contrib import admin

from crm_core.enquiries.models import Enquiry


@admin.register(Enquiry)
class EnquiryAdmin(admin.ModelAdmin):
    list_display = ("enquiry_id", "client_name", "current_status", "date_of_enquiry", "matter_code", "created_by")
    list_filter = ("current_status", "assigned_department")
    search_fields = ("enquiry_id", "client_name", "email", "matter_code")
    readonly_fields = ("enquiry_id", "enquiry_seq", "matter_code", "created_at", "updated_at")
    ordering = ("-created_at",)
