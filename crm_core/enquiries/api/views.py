# backend/crm_core/enquiries/api/views.py
from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.response import Response

from crm_core.audit.api.serializers import AuditLogSerializer
from crm_core.audit.selectors import audit_logs_for_enquiry
from crm_core.common.store import store_guard
from crm_core.enquiries.api.serializers import (
    EnquiryCreatedSerializer,
    EnquiryCreateSerializer,
    EnquirySerializer,
    EnquiryUpdateSerializer,
    ForecastRowSerializer,
    KpiMetricsSerializer,
    StatusSummarySerializer,
)
from crm_core.enquiries.filters import EnquiryFilter
from crm_core.enquiries.metrics import MetricsEngine
from crm_core.enquiries.models import Enquiry
from crm_core.enquiries.selectors import get_enquiry, list_enquiries
from crm_core.enquiries.services import EnquiryService
from crm_core.iam.api.schema_serializers import SuccessResponseSerializer


class EnquiryViewSet(viewsets.GenericViewSet):
    """
    Enquiry pipeline:
    - list/retrieve (filters: status, date_from, date_to, department, lawyer, converted, q)
    - create / partial update / delete
    - dashboard aggregates: status-summary, kpi-metrics, pipeline-forecast
    - audit trail per enquiry
    """
    serializer_class = EnquirySerializer
    queryset = Enquiry.objects.none()
    lookup_value_regex = r"\d+"

    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = EnquiryFilter
    ordering_fields = ["created_at", "date_of_enquiry", "enquiry_seq", "client_name", "proposal_value"]

    def get_queryset(self):
        return list_enquiries()

    @extend_schema(tags=["Enquiries"], responses={200: EnquirySerializer(many=True)})
    @store_guard
    def list(self, request):
        qs = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(EnquirySerializer(page, many=True).data)
        return Response(EnquirySerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Enquiries"], responses={200: EnquirySerializer})
    def retrieve(self, request, pk=None):
        return Response(EnquirySerializer(get_enquiry(int(pk))).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Enquiries"], request=EnquiryCreateSerializer, responses={201: EnquiryCreatedSerializer})
    def create(self, request):
        ser = EnquiryCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        enquiry = EnquiryService.create(data=ser.validated_data, actor_user_id=request.user.id)
        return Response(
            EnquiryCreatedSerializer({"id": enquiry.pk, "enquiry_id": enquiry.enquiry_id}).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(tags=["Enquiries"], request=EnquiryUpdateSerializer, responses={200: EnquirySerializer})
    def partial_update(self, request, pk=None):
        ser = EnquiryUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        enquiry = EnquiryService.update(
            enquiry_id=int(pk),
            data=ser.validated_data,
            actor_user_id=request.user.id,
        )
        return Response(EnquirySerializer(enquiry).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Enquiries"], responses={200: SuccessResponseSerializer})
    def destroy(self, request, pk=None):
        EnquiryService.delete(enquiry_id=int(pk), actor_user_id=request.user.id)
        return Response({"success": True}, status=status.HTTP_200_OK)

    @extend_schema(tags=["Enquiries"], responses={200: StatusSummarySerializer(many=True)})
    @action(detail=False, methods=["get"], url_path="status-summary", pagination_class=None)
    def status_summary(self, request):
        return Response(StatusSummarySerializer(MetricsEngine.status_summary(), many=True).data)

    @extend_schema(tags=["Enquiries"], responses={200: KpiMetricsSerializer})
    @action(detail=False, methods=["get"], url_path="kpi-metrics")
    def kpi_metrics(self, request):
        return Response(KpiMetricsSerializer(MetricsEngine.kpi_metrics()).data)

    @extend_schema(tags=["Enquiries"], responses={200: ForecastRowSerializer(many=True)})
    @action(detail=False, methods=["get"], url_path="pipeline-forecast", pagination_class=None)
    def pipeline_forecast(self, request):
        return Response(ForecastRowSerializer(MetricsEngine.pipeline_forecast(), many=True).data)

    @extend_schema(tags=["Audit"], responses={200: AuditLogSerializer(many=True)})
    @action(detail=True, methods=["get"], url_path="audit", pagination_class=None)
    @store_guard
    def audit(self, request, pk=None):
        logs = audit_logs_for_enquiry(int(pk))
        return Response(AuditLogSerializer(logs, many=True).data, status=status.HTTP_200_OK)
