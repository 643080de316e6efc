"""Identity-based object permissions.

There are no roles in the console: an action is allowed when the caller's
employee id matches one of the identity fields on the row.
"""

from rest_framework.permissions import BasePermission


def caller_employee_id(request) -> str:
    user = getattr(request, "user", None)
    return str(getattr(user, "employee_id", "") or "")


class _EmployeeFieldPermission(BasePermission):
    """Base helper: grant when any listed field on the object equals the caller."""

    employee_fields: tuple[str, ...] = ()

    def has_permission(self, request, view) -> bool:
        return bool(caller_employee_id(request))

    def has_object_permission(self, request, view, obj) -> bool:
        employee_id = caller_employee_id(request)
        return any(
            self._resolve(obj, field) == employee_id for field in self.employee_fields
        )

    @staticmethod
    def _resolve(obj, dotted: str) -> str:
        value = obj
        for part in dotted.split("."):
            value = getattr(value, part, None)
        return str(value or "")


class IsRequester(_EmployeeFieldPermission):
    message = "Only the requester can do this."
    employee_fields = ("requester_id",)


class IsProcessor(_EmployeeFieldPermission):
    message = "Only the assigned processor can do this."
    employee_fields = ("processor_id",)


class IsResponseTargetOrRequester(_EmployeeFieldPermission):
    message = "Only the submitter or the requester can delete this response."
    employee_fields = ("target_id", "request.requester_id")
