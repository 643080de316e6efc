from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from workdesk.approvals import services
from workdesk.approvals.models import ApprovalRequest
from workdesk.roster.services import get_roster
from workdesk.worktemplates.models import WorkTemplate


class ApprovalRequestSerializer(serializers.ModelSerializer):
    status_label = serializers.CharField(source="get_status_display", read_only=True)

    class Meta:
        model = ApprovalRequest
        fields = [
            "id",
            "template_id",
            "template_title",
            "items",
            "title",
            "requester_id",
            "requester_name",
            "requester_position",
            "requester_team",
            "processor_id",
            "processor_name",
            "processor_position",
            "processor_team",
            "employees",
            "status",
            "status_label",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ApprovalCreateSerializer(serializers.Serializer):
    """Create payload.

    ``employees`` takes employee ids or ``{"employee_id", "values"}`` objects.
    ``processor_id`` falls back to the template's default processor.
    """

    template_id = serializers.UUIDField()
    title = serializers.CharField()
    processor_id = serializers.CharField(required=False, allow_blank=True)
    employees = serializers.ListField(
        child=serializers.JSONField(),
        required=False,
        default=list,
    )

    def to_internal_value(self, data):
        if hasattr(data, "items"):
            data = dict(data.items())
            for alias, field in (("templateId", "template_id"), ("processorId", "processor_id")):
                if alias in data and field not in data:
                    data[field] = data.pop(alias)
        return super().to_internal_value(data)

    def validate_template_id(self, value):
        template = WorkTemplate.objects.filter(pk=value).first()
        if template is None:
            msg = _("Template not found.")
            raise serializers.ValidationError(msg)
        return template

    def validate(self, attrs):
        template = attrs["template_id"]
        if not template.items:
            raise serializers.ValidationError(
                {"template_id": [_("The template has no items.")]},
            )
        processor_id = (attrs.get("processor_id") or "").strip()
        processor_id = processor_id or template.default_processor_id
        if not processor_id:
            raise serializers.ValidationError(
                {"processor_id": [_("Select a processor.")]},
            )
        processor = get_roster().get(processor_id)
        if processor is None:
            raise serializers.ValidationError(
                {"processor_id": [_("Processor is not on the roster.")]},
            )
        attrs["template"] = attrs.pop("template_id")
        attrs["processor"] = processor
        attrs.pop("processor_id", None)
        attrs["employees"] = services.resolve_employees(
            attrs.get("employees") or [],
            template.items,
        )
        return attrs

    def create(self, validated_data):
        return services.create_approval(
            requester=self.context["request"].user.employee,
            **validated_data,
        )


class EmployeeSelectionSerializer(serializers.Serializer):
    employee_ids = serializers.ListField(child=serializers.CharField())

    def to_internal_value(self, data):
        if hasattr(data, "get") and "employeeIds" in data and "employee_ids" not in data:
            data = {"employee_ids": data.get("employeeIds")}
        return super().to_internal_value(data)


class ValuesUpdateSerializer(serializers.Serializer):
    values = serializers.DictField(
        child=serializers.DictField(
            child=serializers.CharField(allow_blank=True, allow_null=True),
        ),
    )
