from django.utils.translation import gettext_lazy as _
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed

from workdesk.roster.services import get_roster


class EmployeeSerializer(serializers.Serializer):
    """Public view of a roster row. The credential column is never exposed."""

    employee_id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    department = serializers.CharField(read_only=True)
    team = serializers.CharField(read_only=True)
    position = serializers.CharField(read_only=True)


class LoginSerializer(serializers.Serializer):
    employee_id = serializers.CharField(required=False, allow_blank=True)
    password = serializers.CharField(
        required=False,
        allow_blank=True,
        trim_whitespace=False,
        write_only=True,
    )

    def to_internal_value(self, data):
        # The console form posts camelCase keys.
        if hasattr(data, "get") and "employeeId" in data and "employee_id" not in data:
            data = {**data, "employee_id": data.get("employeeId")}
        return super().to_internal_value(data)

    def validate(self, attrs):
        employee_id = (attrs.get("employee_id") or "").strip()
        password = attrs.get("password") or ""
        if not employee_id or not password:
            msg = _("Enter both your employee ID and password.")
            raise serializers.ValidationError(msg)
        employee = get_roster().authenticate(employee_id, password)
        if employee is None:
            msg = _("Employee ID or password does not match.")
            raise AuthenticationFailed(msg)
        attrs["employee"] = employee
        return attrs


class RefreshSerializer(serializers.Serializer):
    refresh = serializers.CharField()
