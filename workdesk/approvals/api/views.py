from __future__ import annotations

import logging

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework import status
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from workdesk.approvals import services
from workdesk.approvals.api.filters import ApprovalRequestFilter
from workdesk.approvals.api.serializers import ApprovalCreateSerializer
from workdesk.approvals.api.serializers import ApprovalRequestSerializer
from workdesk.approvals.api.serializers import EmployeeSelectionSerializer
from workdesk.approvals.api.serializers import ValuesUpdateSerializer
from workdesk.core.exports import csv_download
from workdesk.core.permissions import IsRequester
from workdesk.core.permissions import caller_employee_id

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(summary="List approvals I requested or process"),
    retrieve=extend_schema(summary="Get an approval request"),
    create=extend_schema(
        summary="Apply for approval",
        request=ApprovalCreateSerializer,
        responses=ApprovalRequestSerializer,
    ),
    destroy=extend_schema(summary="Delete an approval request"),
)
class ApprovalRequestViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = ApprovalRequestSerializer
    permission_classes = [IsAuthenticated]
    filterset_class = ApprovalRequestFilter
    search_fields = ["title", "template_title", "requester_name", "processor_name"]

    def get_queryset(self):
        return services.approvals_for(caller_employee_id(self.request))

    def get_permissions(self):
        if self.action == "destroy":
            return [IsAuthenticated(), IsRequester()]
        return super().get_permissions()

    def get_serializer_class(self):
        if self.action == "create":
            return ApprovalCreateSerializer
        return super().get_serializer_class()

    def create(self, request, *args, **kwargs):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        approval = ser.save()
        return Response(
            ApprovalRequestSerializer(approval).data,
            status=status.HTTP_201_CREATED,
        )

    def perform_destroy(self, instance):
        logger.info(
            "Approval %s deleted by %s",
            instance.pk,
            caller_employee_id(self.request),
        )
        instance.delete()

    @extend_schema(summary="Approve (processor only)", request=None)
    @action(detail=True, methods=["post"], url_path="approve")
    def approve(self, request, pk=None):
        approval = services.approve(self.get_object(), caller_employee_id(request))
        return Response(ApprovalRequestSerializer(approval).data)

    @extend_schema(
        summary="Reselect employees, keeping values of those still selected",
        request=EmployeeSelectionSerializer,
    )
    @action(detail=True, methods=["post"], url_path="employees")
    def employees(self, request, pk=None):
        ser = EmployeeSelectionSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        approval = services.reselect_employees(
            self.get_object(),
            caller_employee_id(request),
            ser.validated_data["employee_ids"],
        )
        return Response(ApprovalRequestSerializer(approval).data)

    @extend_schema(summary="Update line-item values", request=ValuesUpdateSerializer)
    @action(detail=True, methods=["patch"], url_path="values")
    def values(self, request, pk=None):
        ser = ValuesUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        approval = services.update_values(
            self.get_object(),
            caller_employee_id(request),
            ser.validated_data["values"],
        )
        return Response(ApprovalRequestSerializer(approval).data)

    @extend_schema(
        summary="Download line items as CSV",
        responses={(200, "text/csv"): OpenApiTypes.BINARY},
    )
    @action(detail=True, methods=["get"], url_path="export")
    def export(self, request, pk=None):
        approval = self.get_object()
        return csv_download(
            services.export_filename(approval),
            services.export_to_csv(approval),
        )
