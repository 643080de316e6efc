"""Delimited-text export helpers.

Spreadsheet tools only detect UTF-8 (and render Korean headers correctly) when
the file starts with a byte-order mark, so every export goes through
:func:`render_csv`.
"""

from __future__ import annotations

import csv
import io
from typing import TYPE_CHECKING

from django.http import HttpResponse
from django.utils.http import content_disposition_header

if TYPE_CHECKING:  # import for type checking only
    from collections.abc import Iterable
    from collections.abc import Sequence

UTF8_BOM = "\ufeff"
CSV_CONTENT_TYPE = "text/csv; charset=utf-8"


def render_csv(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(headers)
    writer.writerows(rows)
    return UTF8_BOM + buffer.getvalue()


def csv_download(filename: str, text: str) -> HttpResponse:
    response = HttpResponse(text.encode("utf-8"), content_type=CSV_CONTENT_TYPE)
    response["Content-Disposition"] = content_disposition_header(
        as_attachment=True,
        filename=filename,
    )
    return response


def truthy_param(value: str | None) -> bool:
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}
