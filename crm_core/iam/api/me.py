# backend/crm_core/iam/api/me.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from crm_core.iam.api.serializers import PreferencesUpdateSerializer, UserSerializer
from crm_core.iam.services.users import UserService


class MeView(APIView):
    """
    Current account, including role and notification preferences.
    Reachable by inactive accounts too so the UI can explain why it is locked.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: UserSerializer}, tags=["IAM"])
    def get(self, request):
        return Response(UserSerializer(request.user).data, status=status.HTTP_200_OK)

    @extend_schema(request=PreferencesUpdateSerializer, responses={200: UserSerializer}, tags=["IAM"])
    def patch(self, request):
        ser = PreferencesUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        profile = UserService.update_preferences(user=request.user, **ser.validated_data)
        return Response(UserSerializer(profile.user).data, status=status.HTTP_200_OK)
