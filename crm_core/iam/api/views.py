# backend/crm_core/iam/api/views.py
from __future__ import annotations

from django.contrib.auth import get_user_model
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from crm_core.common.api.pagination import paginate
from crm_core.iam.api.schema_serializers import (
    ActivityStatsSerializer,
    RoleUpdateRequestSerializer,
    StatusUpdateRequestSerializer,
    SuccessResponseSerializer,
)
from crm_core.iam.api.serializers import UserSerializer
from crm_core.iam.identity import actor_for
from crm_core.iam.selectors import activity_stats, list_users
from crm_core.iam.services.users import UserService


class UserViewSet(viewsets.GenericViewSet):
    """
    Practice accounts:
    - list (most recently signed-in first)
    - role / status changes (admin only, never on yourself)
    - activity stats
    """
    serializer_class = UserSerializer
    queryset = get_user_model().objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(tags=["Users"], responses={200: UserSerializer(many=True)})
    def list(self, request):
        return paginate(request, list_users(), UserSerializer)

    @extend_schema(tags=["Users"], request=RoleUpdateRequestSerializer, responses={200: SuccessResponseSerializer})
    @action(detail=True, methods=["post"], url_path="role")
    def set_role(self, request, pk=None):
        UserService.update_role(
            actor=actor_for(request.user),
            user_id=int(pk),
            role=request.data.get("role"),
        )
        return Response({"success": True}, status=status.HTTP_200_OK)

    @extend_schema(tags=["Users"], request=StatusUpdateRequestSerializer, responses={200: SuccessResponseSerializer})
    @action(detail=True, methods=["post"], url_path="status")
    def set_status(self, request, pk=None):
        UserService.update_status(
            actor=actor_for(request.user),
            user_id=int(pk),
            status=request.data.get("status"),
        )
        return Response({"success": True}, status=status.HTTP_200_OK)

    @extend_schema(tags=["Users"], responses={200: ActivityStatsSerializer})
    @action(detail=True, methods=["get"], url_path="activity")
    def activity(self, request, pk=None):
        return Response(ActivityStatsSerializer(activity_stats(int(pk))).data, status=status.HTTP_200_OK)
