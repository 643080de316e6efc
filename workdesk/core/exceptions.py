"""API error types shared by the ledgers and the DRF exception handler."""

from __future__ import annotations

import logging

from django.db import DatabaseError
from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = _("The request conflicts with the current state.")
    default_code = "conflict"


class ServiceUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = _("The database is temporarily unavailable.")
    default_code = "service_unavailable"


def ledger_exception_handler(exc, context):
    """Turn database failures into a 503 the console can show as a banner.

    Everything else falls through to the stock DRF handler.
    """
    if isinstance(exc, DatabaseError):
        view = context.get("view")
        logger.error(
            "Database error in %s",
            view.__class__.__name__ if view is not None else "-",
            exc_info=exc,
        )
        exc = ServiceUnavailable(detail=str(exc) or None)
    return exception_handler(exc, context)
