"""Per-employee submission status, derived from the current response set.

Status is never stored. Callers pass the responses they already loaded so a
listing of N requests does not issue N extra queries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import models
from django.utils.translation import gettext_lazy as _

from workdesk.roster.services import get_roster

if TYPE_CHECKING:
    from collections.abc import Iterable

    from workdesk.collection.models import DataRequest
    from workdesk.collection.models import DataResponse


class ResponseStatus(models.TextChoices):
    SUBMITTED = "submitted", _("제출완료")
    NOT_APPLICABLE = "not_applicable", _("해당없음")
    NOT_SUBMITTED = "not_submitted", _("미제출")
    REQUESTED = "requested", _("요청함")


def find_response(
    responses: Iterable[DataResponse],
    employee_id: str,
) -> DataResponse | None:
    employee_id = str(employee_id)
    return next((r for r in responses if r.target_id == employee_id), None)


def compute_status(
    request: DataRequest,
    employee_id: str,
    responses: Iterable[DataResponse] | None = None,
) -> ResponseStatus:
    if not request.is_target(employee_id):
        return ResponseStatus.REQUESTED
    if responses is None:
        responses = request.responses.all()
    response = find_response(responses, employee_id)
    if response is None:
        return ResponseStatus.NOT_SUBMITTED
    if response.not_applicable:
        return ResponseStatus.NOT_APPLICABLE
    return ResponseStatus.SUBMITTED


def status_board(request: DataRequest) -> list[dict]:
    """One row per target in request order, with the matching response if any."""
    responses = list(request.responses.all())
    roster = get_roster()
    rows = []
    for target_id in request.target_ids:
        target_id = str(target_id)
        response = find_response(responses, target_id)
        state = compute_status(request, target_id, responses)
        rows.append(
            {
                "target_id": target_id,
                "target_name": (
                    response.target_name
                    if response is not None and response.target_name
                    else roster.display_name(target_id)
                ),
                "status": state.value,
                "status_label": str(state.label),
                "response_id": response.pk if response is not None else None,
                "submitted_at": response.submitted_at if response is not None else None,
            }
        )
    return rows
