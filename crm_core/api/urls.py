# backend/crm_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from crm_core.audit.api.views import AuditLogViewSet
from crm_core.enquiries.api.views import EnquiryViewSet
from crm_core.iam.api.auth import LoginView, LogoutView, RefreshView
from crm_core.iam.api.me import MeView
from crm_core.iam.api.views import UserViewSet
from crm_core.notifications.api.views import NotificationViewSet
from crm_core.payments.api.views import PaymentViewSet

router = DefaultRouter()

router.register(r"enquiries", EnquiryViewSet, basename="enquiries")
router.register(r"payments", PaymentViewSet, basename="payments")
router.register(r"users", UserViewSet, basename="users")
router.register(r"audit/logs", AuditLogViewSet, basename="audit-logs")
router.register(r"notifications", NotificationViewSet, basename="notifications")

urlpatterns = [
    # Auth + /me
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/refresh/", RefreshView.as_view(), name="refresh"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    path("me/", MeView.as_view(), name="me"),

    *router.urls,
]
