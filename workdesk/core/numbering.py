from __future__ import annotations

from datetime import datetime

from django.utils import timezone


def sequence_number(prefix: str, instant: datetime | None = None) -> str:
    """Human-readable number derived from the creation instant.

    ``REQ-`` + the last six digits of the epoch milliseconds, e.g. ``REQ-482113``.
    Not guaranteed unique; the primary key is the identity.
    """
    instant = instant or timezone.now()
    millis = int(instant.timestamp() * 1000)
    return f"{prefix}-{str(millis)[-6:]}"
