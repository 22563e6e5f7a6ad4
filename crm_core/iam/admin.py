# backend/crm_core/iam/admin.py
from __future__ import annotations

from django.contrib import admin

from crm_core.iam.models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "role", "status", "notification_method", "email_notifications", "updated_at")
    list_filter = ("role", "status", "notification_method")
    search_fields = ("user__username", "user__email")
    autocomplete_fields = ("user",)
    ordering = ("-created_at",)
