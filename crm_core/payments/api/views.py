# backend/crm_core/payments/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from crm_core.common.api.exceptions import NotFoundError
from crm_core.common.api.pagination import paginate
from crm_core.common.store import store_guard
from crm_core.payments.api.serializers import PaymentCreateSerializer, PaymentSerializer, PaymentWriteSerializer
from crm_core.payments.models import Payment
from crm_core.payments.selectors import list_payments, payment_for_enquiry
from crm_core.payments.services import PaymentService


class PaymentViewSet(viewsets.GenericViewSet):
    """
    Payment schedules for converted enquiries.
    """
    serializer_class = PaymentSerializer
    queryset = Payment.objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(
        tags=["Payments"],
        responses={200: PaymentSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="payment_status", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    @store_guard
    def list(self, request):
        qs = list_payments(payment_status=request.query_params.get("payment_status") or None)
        return paginate(request, qs, PaymentSerializer)

    @extend_schema(tags=["Payments"], request=PaymentCreateSerializer, responses={201: PaymentSerializer})
    def create(self, request):
        ser = PaymentCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        data = dict(ser.validated_data)
        enquiry_id = data.pop("enquiry_id")
        matter_code = data.pop("matter_code", None) or None

        pay = PaymentService.create(
            enquiry_id=enquiry_id,
            matter_code=matter_code,
            data=data,
            actor_user_id=request.user.id,
        )
        return Response(PaymentSerializer(pay).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Payments"], request=PaymentWriteSerializer, responses={200: PaymentSerializer})
    def partial_update(self, request, pk=None):
        ser = PaymentWriteSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        pay = PaymentService.update(payment_id=int(pk), data=ser.validated_data, actor_user_id=request.user.id)
        return Response(PaymentSerializer(pay).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Payments"], responses={200: PaymentSerializer})
    @action(detail=False, methods=["get"], url_path=r"by-enquiry/(?P<enquiry_id>\d+)")
    @store_guard
    def by_enquiry(self, request, enquiry_id=None):
        pay = payment_for_enquiry(int(enquiry_id))
        if pay is None:
            raise NotFoundError(f"No payment recorded for enquiry {enquiry_id}.")
        return Response(PaymentSerializer(pay).data, status=status.HTTP_200_OK)
