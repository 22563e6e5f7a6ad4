# backend/crm_core/audit/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from crm_core.audit.api.serializers import AuditLogListSerializer
from crm_core.audit.models import AuditLog
from crm_core.audit.selectors import list_audit_logs
from crm_core.common.store import store_guard


class AuditLogViewSet(viewsets.GenericViewSet):
    """
    Practice-wide audit trail, newest first.
    """
    serializer_class = AuditLogListSerializer
    queryset = AuditLog.objects.none()

    @extend_schema(
        tags=["Audit"],
        responses={200: AuditLogListSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="limit",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Max records to return (default 100, max 500).",
            ),
            OpenApiParameter(
                name="offset",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Records to skip (default 0).",
            ),
            OpenApiParameter(name="action", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="user", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    @store_guard
    def list(self, request):
        user_raw = request.query_params.get("user")
        user_id = None
        if user_raw not in (None, ""):
            try:
                user_id = int(user_raw)
            except ValueError:
                raise ValidationError({"user": "Invalid user id (int expected)"})

        rows = list_audit_logs(
            limit=request.query_params.get("limit"),
            offset=request.query_params.get("offset"),
            action=request.query_params.get("action") or None,
            user_id=user_id,
        )
        return Response(AuditLogListSerializer(rows, many=True).data, status=status.HTTP_200_OK)
