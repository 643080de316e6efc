import logging
from datetime import date
from unittest import mock

import pytest
from django.contrib.auth.models import Group

from workdesk.calendars.models import CalendarTask
from workdesk.collection.models import DataRequest
from workdesk.realtime.events.tables import publish_table_change

EMIT = "workdesk.realtime.events.tables.emit_event_to_table"


@pytest.mark.django_db
class TestTableChangeSignals:
    def test_insert_update_delete_are_published_after_commit(
        self, django_capture_on_commit_callbacks
    ):
        with mock.patch(EMIT) as emit:
            with django_capture_on_commit_callbacks(execute=True):
                request = DataRequest.objects.create(
                    title="t", requester_id="E1", target_ids=["E2"], items=[]
                )
            pk = str(request.pk)
            with django_capture_on_commit_callbacks(execute=True):
                request.title = "t2"
                request.save()
            with django_capture_on_commit_callbacks(execute=True):
                request.delete()

        events = [c.args for c in emit.call_args_list]
        assert events == [
            ("requests", "table_changed", {"table": "requests", "event": "INSERT", "id": pk}),
            ("requests", "table_changed", {"table": "requests", "event": "UPDATE", "id": pk}),
            ("requests", "table_changed", {"table": "requests", "event": "DELETE", "id": pk}),
        ]

    def test_nothing_is_sent_before_commit(self, django_capture_on_commit_callbacks):
        with mock.patch(EMIT) as emit:
            with django_capture_on_commit_callbacks(execute=False) as callbacks:
                CalendarTask.objects.create(
                    name="x", start_date=date(2026, 1, 1), end_date=date(2026, 1, 2)
                )
            emit.assert_not_called()
        assert len(callbacks) == 1

    def test_untracked_tables_are_ignored(self, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            Group.objects.create(name="staff")
        assert callbacks == []


def test_publish_failures_are_logged_not_raised(caplog):
    with mock.patch(EMIT, side_effect=RuntimeError("redis down")):
        with caplog.at_level(logging.ERROR, logger="workdesk.realtime.events.tables"):
            publish_table_change("documents", "INSERT", "abc")
    assert "Failed to publish INSERT abc on documents" in caplog.text
