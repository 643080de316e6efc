import csv
import io
from unittest import mock
from urllib.parse import quote

import pytest
from django.db import IntegrityError
from rest_framework.test import APIClient

from tests.factories import ITEMS
from tests.factories import login_as
from workdesk.collection.models import DataRequest
from workdesk.collection.models import DataResponse
from workdesk.worktemplates.models import WorkTemplate

URL = "/api/v1/collection/requests/"


def _csv_rows(res) -> list[list[str]]:
    text = res.content.decode("utf-8-sig")
    return list(csv.reader(io.StringIO(text)))


@pytest.mark.django_db
class TestCreateRequest:
    def setup_method(self):
        self.client = APIClient()
        login_as(self.client, "E3")

    def test_create(self):
        res = self.client.post(
            URL,
            {"title": "Q1 budget", "targetIds": ["E1", "E2"], "items": ITEMS},
            format="json",
        )
        assert res.status_code == 201
        assert res.data["requester_id"] == "E3"
        assert res.data["requester_name"] == "박지훈"
        assert res.data["request_no"].startswith("REQ-")
        assert res.data["items"] == [{"id": "1", "name": "Amount", "data_type": "number"}]
        assert res.data["my_status"] == "requested"
        assert res.data["response_count"] == 0
        assert not DataResponse.objects.exists()

    @pytest.mark.parametrize(
        "payload",
        [
            {"title": "", "target_ids": ["E1"], "items": ITEMS},
            {"title": "No targets", "target_ids": [], "items": ITEMS},
            {"title": "No items", "target_ids": ["E1"], "items": []},
            {"title": "Blank item", "target_ids": ["E1"], "items": [{"name": ""}]},
            {"title": "Unknown target", "target_ids": ["E1", "Z9"], "items": ITEMS},
        ],
    )
    def test_validation_writes_nothing(self, payload):
        res = self.client.post(URL, payload, format="json")
        assert res.status_code == 400
        assert not DataRequest.objects.exists()

    def test_items_are_snapshotted_from_template(self):
        template = WorkTemplate.objects.create(
            title="Budget",
            items=[{"id": "1", "name": "Amount", "data_type": "number"}],
        )
        res = self.client.post(
            URL,
            {"title": "From template", "target_ids": ["E1"], "template_id": str(template.id)},
            format="json",
        )
        assert res.status_code == 201

        template_id = template.id
        template.items = [{"id": "9", "name": "Changed", "data_type": "text"}]
        template.save()
        template.delete()

        request = DataRequest.objects.get(pk=res.data["id"])
        assert request.items == [{"id": "1", "name": "Amount", "data_type": "number"}]
        assert request.template_id == template_id


@pytest.mark.django_db
class TestRequestLifecycle:
    def setup_method(self):
        self.client = APIClient()
        login_as(self.client, "E3")
        res = self.client.post(
            URL,
            {"title": "Q1 budget", "target_ids": ["E1", "E2"], "items": ITEMS},
            format="json",
        )
        self.request_id = res.data["id"]
        self.detail = f"{URL}{self.request_id}/"

    def _submit(self, employee_id, payload):
        login_as(self.client, employee_id)
        return self.client.post(f"{self.detail}responses/", payload, format="json")

    def _statuses(self):
        login_as(self.client, "E3")
        res = self.client.get(f"{self.detail}statuses/")
        assert res.status_code == 200
        return {row["target_id"]: row["status"] for row in res.data}

    def test_visibility(self):
        login_as(self.client, "E1")
        assert [r["id"] for r in self.client.get(URL).data] == [self.request_id]
        login_as(self.client, "E4")
        assert self.client.get(URL).data == []
        assert self.client.get(self.detail).status_code == 404

    def test_submitted_scenario(self):
        res = self._submit("E1", {"values": {"1": "500"}})
        assert res.status_code == 201
        assert res.data["values"] == {"1": "500"}
        assert res.data["target_name"] == "김민수"

        assert self._statuses() == {"E1": "submitted", "E2": "not_submitted"}

        res = self.client.get(f"{self.detail}export/")
        assert res.status_code == 200
        assert res["Content-Type"].startswith("text/csv")
        assert res.content.startswith(b"\xef\xbb\xbf")
        rows = _csv_rows(res)
        assert len(rows) == 2
        assert rows[1][:3] == ["김민수", "E1", "500"]

    def test_not_applicable_scenario(self):
        res = self._submit("E1", {"notApplicable": True, "values": {"1": "999"}})
        assert res.status_code == 201
        assert res.data["values"] == {}
        assert res.data["status"] == "not_applicable"

        login_as(self.client, "E1")
        listing = self.client.get(URL).data
        assert listing[0]["my_status"] == "not_applicable"
        assert listing[0]["my_status_label"] == "해당없음"

        login_as(self.client, "E3")
        res = self.client.get(f"{self.detail}export/", {"exclude_not_applicable": "true"})
        assert len(_csv_rows(res)) == 1
        assert quote("_해당없음제외.csv") in res["Content-Disposition"]

        res = self.client.get(f"{self.detail}export/")
        rows = _csv_rows(res)
        assert len(rows) == 2
        assert rows[1][2] == "-"

    def test_non_target_cannot_submit(self):
        res = self._submit("E3", {"values": {"1": "1"}})
        assert res.status_code == 400
        assert not DataResponse.objects.exists()

    def test_bad_value_is_rejected(self):
        res = self._submit("E1", {"values": {"1": "lots"}})
        assert res.status_code == 400
        res = self._submit("E1", {"values": {"7": "1"}})
        assert res.status_code == 400
        assert not DataResponse.objects.exists()

    def test_second_submission_conflicts(self):
        assert self._submit("E1", {"values": {"1": "1"}}).status_code == 201
        res = self._submit("E1", {"values": {"1": "2"}})
        assert res.status_code == 409
        assert DataResponse.objects.get().values == {"1": "1"}

    def test_race_on_unique_constraint_conflicts(self):
        with mock.patch.object(
            DataResponse.objects, "create", side_effect=IntegrityError("duplicate")
        ):
            res = self._submit("E1", {"values": {"1": "1"}})
        assert res.status_code == 409

    def test_only_requester_deletes_request(self):
        self._submit("E1", {"values": {"1": "1"}})
        self._submit("E2", {"not_applicable": True})

        login_as(self.client, "E1")
        assert self.client.delete(self.detail).status_code == 403

        login_as(self.client, "E3")
        assert self.client.delete(self.detail).status_code == 204
        assert not DataRequest.objects.filter(pk=self.request_id).exists()
        assert not DataResponse.objects.filter(request_id=self.request_id).exists()

    def test_delete_is_atomic(self):
        self._submit("E1", {"values": {"1": "1"}})
        login_as(self.client, "E3")
        with mock.patch.object(
            DataRequest, "delete", side_effect=IntegrityError("boom")
        ):
            res = self.client.delete(self.detail)
        assert res.status_code == 503
        assert "boom" in res.data["detail"]
        assert DataRequest.objects.filter(pk=self.request_id).exists()
        assert DataResponse.objects.filter(request_id=self.request_id).count() == 1

    def test_delete_response(self):
        self._submit("E1", {"values": {"1": "1"}})
        self._submit("E2", {"values": {"1": "2"}})
        e1_response = DataResponse.objects.get(target_id="E1")

        login_as(self.client, "E2")
        res = self.client.delete(f"/api/v1/collection/responses/{e1_response.id}/")
        assert res.status_code == 403

        login_as(self.client, "E1")
        res = self.client.delete(f"/api/v1/collection/responses/{e1_response.id}/")
        assert res.status_code == 200
        assert [r["target_id"] for r in res.data] == ["E2"]

        login_as(self.client, "E3")
        e2_response = DataResponse.objects.get(target_id="E2")
        res = self.client.delete(f"/api/v1/collection/responses/{e2_response.id}/")
        assert res.status_code == 200
        assert res.data == []

    def test_responses_listing(self):
        self._submit("E1", {"values": {"1": "1"}})
        login_as(self.client, "E3")
        res = self.client.get(f"{self.detail}responses/")
        assert res.status_code == 200
        assert [r["target_id"] for r in res.data] == ["E1"]


@pytest.mark.django_db
class TestCollectionStatus:
    def test_online(self):
        client = APIClient()
        login_as(client, "E1")
        res = client.get("/api/v1/collection/status/")
        assert res.status_code == 200
        assert res.data == {"status": "online", "error": None}
