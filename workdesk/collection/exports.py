"""Result export of a data-collection request.

Columns: submitter name, employee ID, one column per item in declared order,
status, submission time. Not-applicable rows show ``-`` in every item column.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.utils import timezone

from workdesk.collection.status import ResponseStatus
from workdesk.core.exports import render_csv

if TYPE_CHECKING:
    from collections.abc import Iterable

    from workdesk.collection.models import DataRequest
    from workdesk.collection.models import DataResponse

PLACEHOLDER = "-"
SUBMITTED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


def filter_for_export(
    responses: Iterable[DataResponse],
    exclude_not_applicable: bool = False,
) -> list[DataResponse]:
    if exclude_not_applicable:
        return [r for r in responses if not r.not_applicable]
    return list(responses)


def export_headers(request: DataRequest) -> list[str]:
    return ["제출자", "사번", *(item["name"] for item in request.items), "상태", "제출시간"]


def export_row(request: DataRequest, response: DataResponse) -> list[str]:
    if response.not_applicable:
        cells = [PLACEHOLDER for _item in request.items]
        state = ResponseStatus.NOT_APPLICABLE
    else:
        values = response.values or {}
        cells = [str(values.get(item["id"], "")) for item in request.items]
        state = ResponseStatus.SUBMITTED
    submitted_at = timezone.localtime(response.submitted_at).strftime(
        SUBMITTED_AT_FORMAT,
    )
    return [
        response.target_name,
        response.target_id,
        *cells,
        str(state.label),
        submitted_at,
    ]


def export_to_csv(request: DataRequest, responses: Iterable[DataResponse]) -> str:
    return render_csv(
        export_headers(request),
        (export_row(request, response) for response in responses),
    )


def export_filename(request: DataRequest, exclude_not_applicable: bool = False) -> str:
    suffix = "_해당없음제외" if exclude_not_applicable else ""
    return f"{request.title}_결과{suffix}.csv"
