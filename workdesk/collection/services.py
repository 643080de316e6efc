"""Write operations of the request/response ledger.

Input shape is validated by the API serializers; these functions enforce the
ledger rules (target membership, one response per target, atomic delete).
Change events are published by ``workdesk.realtime`` after commit.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.db import IntegrityError
from django.db import transaction
from django.utils.translation import gettext_lazy as _
from rest_framework.exceptions import ValidationError

from workdesk.collection.models import DataRequest
from workdesk.collection.models import DataResponse
from workdesk.core.exceptions import Conflict
from workdesk.worktemplates.items import coerce_values

if TYPE_CHECKING:
    from uuid import UUID

    from django.db.models import QuerySet

    from workdesk.roster.services import Employee

logger = logging.getLogger(__name__)


def visible_request_ids(employee_id: str) -> list:
    """Primary keys of requests the employee created or is a target of.

    Target membership lives in a JSON list, so it is matched in Python to stay
    portable across database backends.
    """
    employee_id = str(employee_id)
    return [
        pk
        for pk, requester_id, target_ids in DataRequest.objects.values_list(
            "id",
            "requester_id",
            "target_ids",
        )
        if requester_id == employee_id or employee_id in {str(t) for t in target_ids or []}
    ]


def visible_requests(employee_id: str) -> QuerySet[DataRequest]:
    return DataRequest.objects.filter(
        pk__in=visible_request_ids(employee_id),
    ).prefetch_related("responses")


def create_request(
    *,
    requester: Employee,
    title: str,
    target_ids: list[str],
    items: list[dict],
    template_id: UUID | None = None,
) -> DataRequest:
    request = DataRequest.objects.create(
        title=title,
        requester_id=requester.employee_id,
        requester_name=requester.name,
        target_ids=list(target_ids),
        items=list(items),
        template_id=template_id,
    )
    logger.info(
        "Request %s (%s) created by %s for %d targets",
        request.pk,
        request.request_no,
        requester.employee_id,
        len(request.target_ids),
    )
    return request


def submit_response(
    request: DataRequest,
    *,
    employee: Employee,
    values: dict | None = None,
    not_applicable: bool = False,
) -> DataResponse:
    if not request.is_target(employee.employee_id):
        raise ValidationError(_("You are not a target of this request."))
    cleaned = {} if not_applicable else coerce_values(request.items, values)
    if request.responses.filter(target_id=employee.employee_id).exists():
        raise Conflict(_("You have already responded to this request."))
    try:
        with transaction.atomic():
            response = DataResponse.objects.create(
                request=request,
                target_id=employee.employee_id,
                target_name=employee.name,
                values=cleaned,
                not_applicable=not_applicable,
            )
    except IntegrityError as exc:
        # Lost a race against a concurrent submission for the same target.
        logger.warning(
            "Duplicate response for request %s by %s",
            request.pk,
            employee.employee_id,
        )
        raise Conflict(_("You have already responded to this request.")) from exc
    logger.info(
        "Response %s submitted to request %s by %s (not_applicable=%s)",
        response.pk,
        request.pk,
        employee.employee_id,
        not_applicable,
    )
    return response


@transaction.atomic
def delete_request(request: DataRequest) -> None:
    """Delete the responses first, then the request, as one unit."""
    request_id = request.pk
    removed, _detail = DataResponse.objects.filter(request=request).delete()
    request.delete()
    logger.info("Request %s deleted with %d responses", request_id, removed)


def delete_response(response: DataResponse) -> list[DataResponse]:
    """Delete one response and return what is left on its request."""
    request = response.request
    response_id = response.pk
    response.delete()
    logger.info("Response %s deleted from request %s", response_id, request.pk)
    return list(request.responses.all())
