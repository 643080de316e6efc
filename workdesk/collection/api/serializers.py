from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from workdesk.collection import services
from workdesk.collection.models import DataRequest
from workdesk.collection.models import DataResponse
from workdesk.collection.status import compute_status
from workdesk.roster.services import get_roster
from workdesk.worktemplates.items import normalize_item_definitions
from workdesk.worktemplates.models import WorkTemplate

# camelCase keys posted by the console
_ALIASES = {
    "targetIds": "target_ids",
    "templateId": "template_id",
    "notApplicable": "not_applicable",
}


def _apply_aliases(data):
    if not hasattr(data, "items"):
        return data
    out = dict(data.items())
    for alias, field in _ALIASES.items():
        if alias in out and field not in out:
            out[field] = out.pop(alias)
    return out


def _caller_id(serializer) -> str:
    request = serializer.context.get("request")
    return str(getattr(getattr(request, "user", None), "employee_id", "") or "")


class DataResponseSerializer(serializers.ModelSerializer):
    status = serializers.SerializerMethodField()

    class Meta:
        model = DataResponse
        fields = [
            "id",
            "request",
            "target_id",
            "target_name",
            "values",
            "not_applicable",
            "submitted_at",
            "status",
        ]
        read_only_fields = fields

    def get_status(self, obj) -> str:
        return "not_applicable" if obj.not_applicable else "submitted"


class ResponseSubmitSerializer(serializers.Serializer):
    values = serializers.DictField(
        child=serializers.CharField(allow_blank=True, allow_null=True),
        required=False,
        default=dict,
    )
    not_applicable = serializers.BooleanField(required=False, default=False)

    def to_internal_value(self, data):
        return super().to_internal_value(_apply_aliases(data))


class DataRequestSerializer(serializers.ModelSerializer):
    target_ids = serializers.ListField(
        child=serializers.CharField(),
        allow_empty=True,
        required=False,
        default=list,
    )
    items = serializers.JSONField(required=False)
    template_id = serializers.UUIDField(required=False, allow_null=True)
    my_status = serializers.SerializerMethodField()
    my_status_label = serializers.SerializerMethodField()
    response_count = serializers.SerializerMethodField()

    class Meta:
        model = DataRequest
        fields = [
            "id",
            "request_no",
            "title",
            "requester_id",
            "requester_name",
            "template_id",
            "target_ids",
            "items",
            "created_at",
            "my_status",
            "my_status_label",
            "response_count",
        ]
        read_only_fields = [
            "id",
            "request_no",
            "requester_id",
            "requester_name",
            "created_at",
        ]

    def to_internal_value(self, data):
        return super().to_internal_value(_apply_aliases(data))

    def _status(self, obj):
        return compute_status(obj, _caller_id(self), obj.responses.all())

    def get_my_status(self, obj) -> str:
        return self._status(obj).value

    def get_my_status_label(self, obj) -> str:
        return str(self._status(obj).label)

    def get_response_count(self, obj) -> int:
        return len(obj.responses.all())

    def validate_target_ids(self, value):
        target_ids = list(dict.fromkeys(str(v).strip() for v in value if str(v).strip()))
        if not target_ids:
            msg = _("Select at least one target employee.")
            raise serializers.ValidationError(msg)
        roster = get_roster()
        unknown = [t for t in target_ids if roster.get(t) is None]
        if unknown:
            msg = f"Unknown employee IDs: {', '.join(unknown)}"
            raise serializers.ValidationError(msg)
        return target_ids

    def validate(self, attrs):
        items = attrs.get("items")
        template_id = attrs.get("template_id")
        if not items and template_id:
            template = WorkTemplate.objects.filter(pk=template_id).first()
            if template is None:
                raise serializers.ValidationError(
                    {"template_id": [_("Template not found.")]},
                )
            items = template.items
        try:
            attrs["items"] = normalize_item_definitions(items if items is not None else [])
        except serializers.ValidationError as exc:
            raise serializers.ValidationError({"items": exc.detail}) from exc
        return attrs

    def create(self, validated_data):
        return services.create_request(
            requester=self.context["request"].user.employee,
            title=validated_data["title"],
            target_ids=validated_data["target_ids"],
            items=validated_data["items"],
            template_id=validated_data.get("template_id"),
        )
