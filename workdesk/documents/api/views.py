import logging

from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from workdesk.core.permissions import caller_employee_id
from workdesk.documents.api.serializers import DocumentSerializer
from workdesk.documents.models import Document

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(summary="List documents"),
    retrieve=extend_schema(summary="Get a document"),
    create=extend_schema(summary="Register a document"),
    partial_update=extend_schema(summary="Update a document"),
    destroy=extend_schema(summary="Delete a document"),
)
class DocumentViewSet(viewsets.ModelViewSet):
    queryset = Document.objects.all()
    serializer_class = DocumentSerializer
    permission_classes = [IsAuthenticated]
    search_fields = ["doc_no", "title", "content", "enforcer_name"]

    def perform_create(self, serializer):
        obj = serializer.save(created_by=caller_employee_id(self.request))
        logger.info("Document %s registered by %s", obj.doc_no, obj.created_by)

    def perform_destroy(self, instance):
        logger.info("Document %s deleted", instance.doc_no)
        return super().perform_destroy(instance)
