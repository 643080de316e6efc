from __future__ import annotations

import logging
from typing import Any

from workdesk.realtime.socketio import SUBSCRIBABLE_TABLES
from workdesk.realtime.socketio import emit_event_to_table

logger = logging.getLogger(__name__)

TABLE_CHANGED = "table_changed"
INSERT = "INSERT"
UPDATE = "UPDATE"
DELETE = "DELETE"


def build_table_change_payload(table: str, event: str, pk: Any) -> dict[str, Any]:
    return {"table": table, "event": event, "id": str(pk)}


def publish_table_change(table: str, event: str, pk: Any) -> None:
    """Tell subscribers of ``table`` to reload. Failures are logged, not raised."""

    if table not in SUBSCRIBABLE_TABLES:
        return
    payload = build_table_change_payload(table, event, pk)
    try:
        emit_event_to_table(table, TABLE_CHANGED, payload)
    except Exception:
        logger.exception("Failed to publish %s %s on %s", event, pk, table)
