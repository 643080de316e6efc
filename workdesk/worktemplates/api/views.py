from __future__ import annotations

import logging

from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import status
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from workdesk.worktemplates import services
from workdesk.worktemplates.api.serializers import ItemDefinitionSerializer
from workdesk.worktemplates.api.serializers import WorkTemplateSerializer
from workdesk.worktemplates.models import WorkTemplate

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(summary="List work templates"),
    retrieve=extend_schema(summary="Get a template"),
    create=extend_schema(summary="Create a template"),
    partial_update=extend_schema(summary="Update a template"),
    destroy=extend_schema(summary="Delete a template"),
)
class WorkTemplateViewSet(viewsets.ModelViewSet):
    queryset = WorkTemplate.objects.all()
    serializer_class = WorkTemplateSerializer
    permission_classes = [IsAuthenticated]
    search_fields = ["title", "description"]

    def perform_create(self, serializer):
        obj = serializer.save()
        logger.info("Template %s created: %s", obj.pk, obj.title)

    def perform_destroy(self, instance):
        # Requests keep their own item snapshot; nothing else to clean up.
        logger.info("Template %s deleted", instance.pk)
        return super().perform_destroy(instance)

    @extend_schema(
        summary="Add an item",
        request=ItemDefinitionSerializer,
        responses=WorkTemplateSerializer,
    )
    @action(detail=True, methods=["post"], url_path="items")
    def add_item(self, request, pk=None):
        template = services.add_item(self.get_object(), dict(request.data))
        return Response(
            self.get_serializer(template).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(summary="Remove an item", responses=WorkTemplateSerializer)
    @action(detail=True, methods=["delete"], url_path=r"items/(?P<item_id>[^/.]+)")
    def remove_item(self, request, pk=None, item_id=None):
        template = services.remove_item(self.get_object(), item_id)
        return Response(self.get_serializer(template).data)
