from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from workdesk.roster.services import get_roster
from workdesk.worktemplates.items import normalize_item_definitions
from workdesk.worktemplates.models import WorkTemplate


class WorkTemplateSerializer(serializers.ModelSerializer):
    default_processor_name = serializers.SerializerMethodField()

    class Meta:
        model = WorkTemplate
        fields = [
            "id",
            "title",
            "description",
            "items",
            "default_processor_id",
            "default_processor_name",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
        extra_kwargs = {"items": {"required": True}}

    def get_default_processor_name(self, obj) -> str:
        if not obj.default_processor_id:
            return ""
        return get_roster().display_name(obj.default_processor_id)

    def validate_items(self, value):
        return normalize_item_definitions(value)

    def validate_default_processor_id(self, value):
        value = (value or "").strip()
        if value and get_roster().get(value) is None:
            msg = _("Default processor is not on the roster.")
            raise serializers.ValidationError(msg)
        return value


class ItemDefinitionSerializer(serializers.Serializer):
    """Request body of the add-item action; normalized by the service."""

    id = serializers.CharField(required=False, allow_blank=True)
    name = serializers.CharField()
    data_type = serializers.ChoiceField(
        choices=["text", "number", "date", "select"],
        required=False,
    )
    options = serializers.ListField(child=serializers.CharField(), required=False)
