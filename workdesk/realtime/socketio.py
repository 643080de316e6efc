"""Socket.IO server replacing the hosted database's change feed.

Frontend convention:
- Socket.IO path: /ws/realtime/
- Auth: `query.token` or `auth.token` (JWT access token)
- Client emits `subscribe` / `unsubscribe` with one table name or a list.
- Server emits `table_changed` `{table, event, id}` to the table's room.

Clients treat `table_changed` purely as a reload trigger.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import parse_qs

import socketio
from asgiref.sync import async_to_sync
from django.conf import settings
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

from workdesk.roster.authentication import RosterUser

logger = logging.getLogger(__name__)

SUBSCRIBABLE_TABLES = frozenset(
    {
        "requests",
        "responses",
        "work_templates",
        "work_app_requests",
        "documents",
        "ai_analyzed_tasks",
    },
)


def _client_manager() -> socketio.AsyncManager | None:
    # Fan out through Redis so events raised in any worker reach every socket.
    if settings.REDIS_URL:
        return socketio.AsyncRedisManager(settings.REDIS_URL)
    return None


def _cors_allowed_origins() -> str | list[str]:
    origins = list(settings.SOCKETIO_CORS_ALLOWED_ORIGINS)
    return "*" if "*" in origins else origins


sio = socketio.AsyncServer(
    async_mode="asgi",
    client_manager=_client_manager(),
    cors_allowed_origins=_cors_allowed_origins(),
    logger=False,
    engineio_logger=False,
)


def room_for_table(table: str) -> str:
    return f"table_{table}"


def room_for_employee(employee_id: str) -> str:
    return f"employee_{employee_id}"


def _user_from_access_token(token: str) -> RosterUser:
    return RosterUser(AccessToken(token))


def _extract_token(environ: dict[str, Any], auth: Any | None) -> str | None:
    """Extract JWT token from Socket.IO environ/auth.

    Handles python-socketio environ shapes across ASGI/WSGI servers.
    """

    scope: Any = environ
    if isinstance(environ, dict) and "asgi.scope" in environ:
        inner = environ.get("asgi.scope")
        if isinstance(inner, dict):
            scope = inner

    query_string: str | bytes = ""
    if isinstance(scope, dict) and "query_string" in scope:
        query_string = scope.get("query_string", b"")
    elif isinstance(scope, dict) and "QUERY_STRING" in scope:
        query_string = scope.get("QUERY_STRING", "")

    if isinstance(query_string, (bytes, bytearray)):
        query_string = query_string.decode(errors="ignore")

    token = parse_qs(str(query_string)).get("token", [None])[0]
    if isinstance(token, str) and token:
        return token

    if isinstance(auth, dict):
        auth_token = auth.get("token")
        if isinstance(auth_token, str) and auth_token:
            return auth_token

    return None


def _requested_tables(data: Any) -> list[str]:
    if isinstance(data, dict):
        data = data.get("tables")
    if isinstance(data, str):
        data = [data]
    if not isinstance(data, (list, tuple)):
        return []
    return [str(table) for table in data if str(table) in SUBSCRIBABLE_TABLES]


@sio.event
async def connect(sid: str, environ: dict[str, Any], auth: Any | None = None):
    token = _extract_token(environ, auth)
    if not token:
        msg = "unauthorized"
        raise ConnectionRefusedError(msg)

    # Stateless token: no database or roster lookup on connect.
    try:
        user = _user_from_access_token(token)
    except TokenError as exc:
        if "expired" in str(exc).lower():
            msg = "jwt_expired"
            raise ConnectionRefusedError(msg) from exc
        msg = "unauthorized"
        raise ConnectionRefusedError(msg) from exc

    if not user.employee_id:
        msg = "unauthorized"
        raise ConnectionRefusedError(msg)

    await sio.save_session(sid, {"employee_id": user.employee_id, "tables": []})
    await sio.enter_room(sid, room_for_employee(user.employee_id))


@sio.event
async def disconnect(sid: str, *args):
    _ = sid


@sio.event
async def subscribe(sid: str, data: Any):
    tables = _requested_tables(data)
    async with sio.session(sid) as session:
        current = set(session.get("tables", []))
        for table in tables:
            await sio.enter_room(sid, room_for_table(table))
            current.add(table)
        session["tables"] = sorted(current)
        return {"subscribed": session["tables"]}


@sio.event
async def unsubscribe(sid: str, data: Any):
    tables = _requested_tables(data)
    async with sio.session(sid) as session:
        current = set(session.get("tables", []))
        for table in tables:
            await sio.leave_room(sid, room_for_table(table))
            current.discard(table)
        session["tables"] = sorted(current)
        return {"subscribed": session["tables"]}


def emit_event_to_room(room: str, event: str, payload: dict[str, Any]) -> None:
    """Emit an event to a room from sync Django code."""

    async_to_sync(sio.emit)(event, payload, room=room)


def emit_event_to_table(table: str, event: str, payload: dict[str, Any]) -> None:
    emit_event_to_room(room_for_table(table), event, payload)


def emit_event_to_employee(
    employee_id: str,
    event: str,
    payload: dict[str, Any],
) -> None:
    emit_event_to_room(room_for_employee(employee_id), event, payload)
