"""Approval ledger operations.

``pending -> approved`` is the only status transition. Identity checks
compare the caller's employee id with the stored requester/processor ids.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from typing import Any

from django.db import transaction
from django.db.models import Q
from django.utils.translation import gettext_lazy as _
from rest_framework.exceptions import PermissionDenied
from rest_framework.exceptions import ValidationError

from workdesk.approvals.models import ApprovalRequest
from workdesk.core.exceptions import Conflict
from workdesk.core.exports import render_csv
from workdesk.roster.services import get_roster
from workdesk.worktemplates.items import coerce_values

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from workdesk.roster.services import Employee
    from workdesk.worktemplates.models import WorkTemplate

logger = logging.getLogger(__name__)


def approvals_for(employee_id: str) -> QuerySet[ApprovalRequest]:
    return ApprovalRequest.objects.filter(
        Q(requester_id=employee_id) | Q(processor_id=employee_id),
    )


def _line_item(employee: Employee, values: dict[str, str]) -> dict[str, Any]:
    return {**employee.as_dict(), "values": values}


def resolve_employees(
    selection: list[str | dict],
    items: list[dict],
) -> list[dict[str, Any]]:
    """Turn ids (or ``{"employee_id", "values"}`` objects) into line items.

    Every id must resolve in the roster; values are coerced against ``items``.
    Duplicate ids keep the first occurrence.
    """
    roster = get_roster()
    resolved: list[dict[str, Any]] = []
    seen: set[str] = set()
    unknown: list[str] = []
    for entry in selection:
        if isinstance(entry, dict):
            employee_id = str(entry.get("employee_id") or entry.get("employeeId") or "")
            raw_values = entry.get("values")
        else:
            employee_id, raw_values = str(entry), None
        employee_id = employee_id.strip()
        if not employee_id or employee_id in seen:
            continue
        employee = roster.get(employee_id)
        if employee is None:
            unknown.append(employee_id)
            continue
        seen.add(employee_id)
        resolved.append(_line_item(employee, coerce_values(items, raw_values)))
    if unknown:
        msg = f"Unknown employee IDs: {', '.join(unknown)}"
        raise ValidationError({"employees": [msg]})
    return resolved


def merge_employee_selection(
    current: list[dict[str, Any]],
    new_ids: list[str],
    items: list[dict],
) -> list[dict[str, Any]]:
    """Replace the selection, keeping entered values for ids still selected."""
    kept_values = {row["employee_id"]: row.get("values") or {} for row in current}
    return resolve_employees(
        [
            {"employee_id": employee_id, "values": kept_values.get(str(employee_id))}
            for employee_id in new_ids
        ],
        items,
    )


def create_approval(
    *,
    requester: Employee,
    template: WorkTemplate,
    title: str,
    processor: Employee,
    employees: list[dict[str, Any]],
) -> ApprovalRequest:
    """``employees`` are line items as returned by :func:`resolve_employees`."""
    items = list(template.items)
    approval = ApprovalRequest.objects.create(
        template_id=template.pk,
        template_title=template.title,
        items=items,
        title=title,
        requester_id=requester.employee_id,
        requester_name=requester.name,
        requester_position=requester.position,
        requester_team=requester.team,
        processor_id=processor.employee_id,
        processor_name=processor.name,
        processor_position=processor.position,
        processor_team=processor.team,
        employees=employees,
    )
    logger.info(
        "Approval %s created by %s for processor %s",
        approval.pk,
        requester.employee_id,
        processor.employee_id,
    )
    return approval


def _locked(approval: ApprovalRequest) -> ApprovalRequest:
    return ApprovalRequest.objects.select_for_update().get(pk=approval.pk)


def _require_pending(approval: ApprovalRequest) -> None:
    if not approval.is_pending:
        msg = _("This request is already %(status)s.") % {
            "status": approval.get_status_display(),
        }
        raise Conflict(msg)


def _require_requester(approval: ApprovalRequest, employee_id: str) -> None:
    if approval.requester_id != employee_id:
        raise PermissionDenied(_("Only the requester can change this request."))


@transaction.atomic
def approve(approval: ApprovalRequest, employee_id: str) -> ApprovalRequest:
    approval = _locked(approval)
    if approval.processor_id != employee_id:
        raise PermissionDenied(_("Only the assigned processor can approve."))
    _require_pending(approval)
    approval.status = ApprovalRequest.Status.APPROVED
    approval.save(update_fields=["status", "updated_at"])
    logger.info("Approval %s approved by %s", approval.pk, employee_id)
    return approval


@transaction.atomic
def reselect_employees(
    approval: ApprovalRequest,
    employee_id: str,
    new_ids: list[str],
) -> ApprovalRequest:
    approval = _locked(approval)
    _require_requester(approval, employee_id)
    _require_pending(approval)
    approval.employees = merge_employee_selection(
        approval.employees,
        new_ids,
        approval.items,
    )
    approval.save(update_fields=["employees", "updated_at"])
    return approval


@transaction.atomic
def update_values(
    approval: ApprovalRequest,
    employee_id: str,
    values_by_employee: dict[str, dict],
) -> ApprovalRequest:
    """Overwrite the values of already selected employees."""
    approval = _locked(approval)
    _require_requester(approval, employee_id)
    _require_pending(approval)
    selected = {row["employee_id"] for row in approval.employees}
    unknown = sorted(str(k) for k in values_by_employee if str(k) not in selected)
    if unknown:
        msg = f"Not selected on this request: {', '.join(unknown)}"
        raise ValidationError({"values": [msg]})
    updates = {str(k): v for k, v in values_by_employee.items()}
    approval.employees = [
        {**row, "values": coerce_values(approval.items, updates[row["employee_id"]])}
        if row["employee_id"] in updates
        else row
        for row in approval.employees
    ]
    approval.save(update_fields=["employees", "updated_at"])
    return approval


def export_to_csv(approval: ApprovalRequest) -> str:
    headers = ["성명", "사번", "부서", "팀", *(item["name"] for item in approval.items)]
    rows = [
        [
            row.get("name", ""),
            row.get("employee_id", ""),
            row.get("department", ""),
            row.get("team", ""),
            *(str((row.get("values") or {}).get(item["id"], "")) for item in approval.items),
        ]
        for row in approval.employees
    ]
    return render_csv(headers, rows)


def export_filename(approval: ApprovalRequest) -> str:
    return f"{approval.template_title or approval.title}_결과.csv"
