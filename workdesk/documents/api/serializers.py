from rest_framework import serializers

from workdesk.documents.models import Document
from workdesk.documents.models import default_doc_no


class DocumentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Document
        fields = [
            "id",
            "doc_no",
            "title",
            "content",
            "dept",
            "enforcer_name",
            "enforced_at",
            "created_at",
            "created_by",
        ]
        read_only_fields = ["id", "created_at", "created_by"]
        extra_kwargs = {"doc_no": {"required": False, "allow_blank": True}}

    def validate_doc_no(self, value):
        return value.strip() or default_doc_no()
