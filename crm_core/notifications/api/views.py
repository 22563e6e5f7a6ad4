from __future__ import annotations

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from crm_core.common.api.exceptions import NotFoundError
from crm_core.notifications.api.serializers import NotificationSerializer
from crm_core.notifications.models import Notification
from crm_core.notifications.selectors import notifications_for


class NotificationViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    serializer_class = NotificationSerializer
    queryset = Notification.objects.none()
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        qs = notifications_for(user_id=self.request.user.id)
        is_read = self.request.query_params.get("is_read")
        if is_read in ("true", "false"):
            qs = qs.filter(is_read=(is_read == "true"))
        return qs.order_by("-created_at", "-id")

    @action(methods=["POST"], detail=True, url_path="mark-read")
    def mark_read(self, request, pk=None):
        notif = notifications_for(user_id=request.user.id).filter(pk=pk).first()
        if notif is None:
            raise NotFoundError("Notification not found.")
        notif.mark_read()
        notif.save(update_fields=["is_read", "read_at", "updated_at"])
        return Response(NotificationSerializer(notif).data, status=status.HTTP_200_OK)
