"""Data-collection requests and their per-target responses."""

from __future__ import annotations

import logging

from django.db import DatabaseError
from django.db import connection
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework import status
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from workdesk.collection import services
from workdesk.collection.api.serializers import DataRequestSerializer
from workdesk.collection.api.serializers import DataResponseSerializer
from workdesk.collection.api.serializers import ResponseSubmitSerializer
from workdesk.collection.exports import export_filename
from workdesk.collection.exports import export_to_csv
from workdesk.collection.exports import filter_for_export
from workdesk.collection.models import DataResponse
from workdesk.collection.status import status_board
from workdesk.core.exports import csv_download
from workdesk.core.exports import truthy_param
from workdesk.core.permissions import IsRequester
from workdesk.core.permissions import IsResponseTargetOrRequester
from workdesk.core.permissions import caller_employee_id

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(summary="List requests visible to the caller"),
    retrieve=extend_schema(summary="Get a request"),
    create=extend_schema(summary="Create a data-collection request"),
    destroy=extend_schema(summary="Delete a request and all its responses"),
)
class DataRequestViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = DataRequestSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return services.visible_requests(caller_employee_id(self.request))

    def get_permissions(self):
        if self.action == "destroy":
            return [IsAuthenticated(), IsRequester()]
        return super().get_permissions()

    def perform_destroy(self, instance):
        services.delete_request(instance)

    @extend_schema(
        summary="List or submit responses",
        request=ResponseSubmitSerializer,
        responses=DataResponseSerializer(many=True),
    )
    @action(detail=True, methods=["get", "post"], url_path="responses")
    def responses(self, request, pk=None):
        data_request = self.get_object()
        if request.method == "GET":
            return Response(
                DataResponseSerializer(data_request.responses.all(), many=True).data,
            )
        ser = ResponseSubmitSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        response = services.submit_response(
            data_request,
            employee=request.user.employee,
            values=ser.validated_data["values"],
            not_applicable=ser.validated_data["not_applicable"],
        )
        return Response(
            DataResponseSerializer(response).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(summary="Per-target submission status")
    @action(detail=True, methods=["get"], url_path="statuses")
    def statuses(self, request, pk=None):
        return Response(status_board(self.get_object()))

    @extend_schema(
        summary="Download results as CSV",
        parameters=[OpenApiParameter("exclude_not_applicable", bool)],
        responses={(200, "text/csv"): OpenApiTypes.BINARY},
    )
    @action(detail=True, methods=["get"], url_path="export")
    def export(self, request, pk=None):
        data_request = self.get_object()
        exclude = truthy_param(request.query_params.get("exclude_not_applicable"))
        responses = filter_for_export(data_request.responses.all(), exclude)
        return csv_download(
            export_filename(data_request, exclude),
            export_to_csv(data_request, responses),
        )


@extend_schema_view(
    retrieve=extend_schema(summary="Get a response"),
    destroy=extend_schema(
        summary="Delete a response",
        responses=DataResponseSerializer(many=True),
    ),
)
class DataResponseViewSet(
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = DataResponseSerializer
    permission_classes = [IsAuthenticated, IsResponseTargetOrRequester]

    def get_queryset(self):
        me = caller_employee_id(self.request)
        return DataResponse.objects.filter(
            request_id__in=services.visible_request_ids(me),
        ).select_related(
            "request",
        )

    def destroy(self, request, *args, **kwargs):
        remaining = services.delete_response(self.get_object())
        return Response(DataResponseSerializer(remaining, many=True).data)


class CollectionStatusView(APIView):
    """Connectivity probe behind the console's connection chip."""

    @extend_schema(summary="Database connectivity", tags=["Collection"])
    def get(self, request):
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
        except DatabaseError as exc:
            logger.warning("Collection status probe failed: %s", exc)
            return Response({"status": "offline", "error": str(exc)})
        return Response({"status": "online", "error": None})
