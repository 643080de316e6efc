from unittest import mock

import pytest
from asgiref.sync import async_to_sync

from workdesk.realtime import socketio as realtime
from workdesk.roster.authentication import token_user_for
from workdesk.roster.services import get_roster


def _access_token(employee_id: str) -> str:
    return str(token_user_for(get_roster().get(employee_id)).token)


class TestExtractToken:
    def test_from_asgi_query_string(self):
        environ = {"asgi.scope": {"query_string": b"EIO=4&token=abc"}}
        assert realtime._extract_token(environ, None) == "abc"

    def test_from_wsgi_query_string(self):
        assert realtime._extract_token({"QUERY_STRING": "token=xyz"}, None) == "xyz"

    def test_falls_back_to_auth_payload(self):
        assert realtime._extract_token({}, {"token": "from-auth"}) == "from-auth"

    def test_missing(self):
        assert realtime._extract_token({}, None) is None


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        ("requests", ["requests"]),
        (["requests", "responses", "unknown"], ["requests", "responses"]),
        ({"tables": ["documents"]}, ["documents"]),
        (None, []),
        (42, []),
    ],
)
def test_requested_tables(data, expected):
    assert realtime._requested_tables(data) == expected


class TestConnect:
    def test_valid_token_joins_employee_room(self):
        environ = {"asgi.scope": {"query_string": f"token={_access_token('E2')}".encode()}}
        with (
            mock.patch.object(realtime.sio, "save_session", new_callable=mock.AsyncMock) as save,
            mock.patch.object(realtime.sio, "enter_room", new_callable=mock.AsyncMock) as enter,
        ):
            async_to_sync(realtime.connect)("sid-1", environ)
        save.assert_awaited_once_with("sid-1", {"employee_id": "E2", "tables": []})
        enter.assert_awaited_once_with("sid-1", "employee_E2")

    @pytest.mark.parametrize("environ", [{}, {"QUERY_STRING": "token=not-a-jwt"}])
    def test_rejects_missing_or_bad_token(self, environ):
        with pytest.raises(ConnectionRefusedError):
            async_to_sync(realtime.connect)("sid-2", environ)


def test_emit_helpers_target_rooms():
    with mock.patch.object(realtime.sio, "emit", new_callable=mock.AsyncMock) as emit:
        realtime.emit_event_to_table("requests", "table_changed", {"id": "1"})
        realtime.emit_event_to_employee("E1", "ping", {})
    assert emit.await_args_list == [
        mock.call("table_changed", {"id": "1"}, room="table_requests"),
        mock.call("ping", {}, room="employee_E1"),
    ]
