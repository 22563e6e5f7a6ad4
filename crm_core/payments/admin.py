# backend/crm_core/payments/admin.py
from django.contrib import admin

from crm_core.payments.models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("matter_code", "enquiry_id", "payment_status", "total_amount", "amount_paid", "amount_outstanding")
    list_filter = ("payment_status",)
    search_fields = ("matter_code",)
    readonly_fields = ("amount_outstanding", "created_at", "updated_at")
    ordering = ("-created_at",)
