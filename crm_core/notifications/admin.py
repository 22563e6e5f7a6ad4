from django.contrib import admin

from crm_core.notifications.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("recipient", "channel", "event", "title", "enquiry_code", "is_read", "created_at")
    list_filter = ("channel", "event", "is_read")
    search_fields = ("title", "enquiry_code", "recipient__username")
    ordering = ("-created_at",)
