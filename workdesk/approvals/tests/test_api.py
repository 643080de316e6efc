import csv
import io

import pytest
from rest_framework.test import APIClient

from tests.factories import login_as
from workdesk.approvals.models import ApprovalRequest
from workdesk.worktemplates.models import WorkTemplate

URL = "/api/v1/approvals/"


@pytest.mark.django_db
class TestApprovalAPI:
    def setup_method(self):
        self.client = APIClient()
        self.template = WorkTemplate.objects.create(
            title="초과근무",
            items=[{"id": "1", "name": "Hours", "data_type": "number"}],
            default_processor_id="E3",
        )
        login_as(self.client, "E1")

    def _create(self, **extra):
        payload = {
            "template_id": str(self.template.id),
            "title": "3월 초과근무",
            "employees": [{"employee_id": "E1", "values": {"1": "4"}}, "E2"],
            **extra,
        }
        return self.client.post(URL, payload, format="json")

    def test_create_snapshots_template_and_defaults_processor(self):
        res = self._create()
        assert res.status_code == 201
        assert res.data["status"] == "pending"
        assert res.data["processor_id"] == "E3"
        assert res.data["processor_name"] == "박지훈"
        assert res.data["requester_team"] == "인사팀"
        assert res.data["template_title"] == "초과근무"
        assert res.data["items"] == self.template.items
        assert [e["employee_id"] for e in res.data["employees"]] == ["E1", "E2"]

    @pytest.mark.parametrize(
        "extra",
        [
            {"title": ""},
            {"processor_id": "Z9"},
            {"employees": ["Z9"]},
            {"template_id": "00000000-0000-0000-0000-000000000000"},
        ],
    )
    def test_create_validation(self, extra):
        res = self._create(**extra)
        assert res.status_code == 400
        assert not ApprovalRequest.objects.exists()

    def test_create_rejects_template_without_items(self):
        self.template.items = []
        self.template.save()
        res = self._create(employees=["E2"])
        assert res.status_code == 400
        assert "template_id" in res.data
        assert not ApprovalRequest.objects.exists()

    def test_create_requires_some_processor(self):
        self.template.default_processor_id = ""
        self.template.save()
        res = self._create()
        assert res.status_code == 400

    def test_approve_by_processor_only(self):
        approval_id = self._create().data["id"]

        res = self.client.post(f"{URL}{approval_id}/approve/")
        assert res.status_code == 403

        login_as(self.client, "E3")
        res = self.client.post(f"{URL}{approval_id}/approve/")
        assert res.status_code == 200
        assert res.data["status"] == "approved"

        res = self.client.post(f"{URL}{approval_id}/approve/")
        assert res.status_code == 409

    def test_listing_and_status_filter(self):
        approval_id = self._create().data["id"]
        login_as(self.client, "E3")
        assert [a["id"] for a in self.client.get(URL).data] == [approval_id]
        assert self.client.get(URL, {"status": "approved"}).data == []

        login_as(self.client, "E4")
        assert self.client.get(URL).data == []

    def test_reselect_employees(self):
        approval_id = self._create().data["id"]
        res = self.client.post(
            f"{URL}{approval_id}/employees/",
            {"employee_ids": ["E1", "E4"]},
            format="json",
        )
        assert res.status_code == 200
        assert [(e["employee_id"], e["values"]) for e in res.data["employees"]] == [
            ("E1", {"1": "4"}),
            ("E4", {}),
        ]

    def test_update_values_requester_only_while_pending(self):
        approval_id = self._create().data["id"]
        res = self.client.patch(
            f"{URL}{approval_id}/values/",
            {"values": {"E2": {"1": "6"}}},
            format="json",
        )
        assert res.status_code == 200
        assert res.data["employees"][1]["values"] == {"1": "6"}

        res = self.client.patch(
            f"{URL}{approval_id}/values/",
            {"values": {"E4": {"1": "6"}}},
            format="json",
        )
        assert res.status_code == 400

        login_as(self.client, "E3")
        res = self.client.patch(
            f"{URL}{approval_id}/values/",
            {"values": {"E2": {"1": "1"}}},
            format="json",
        )
        assert res.status_code == 403
        self.client.post(f"{URL}{approval_id}/approve/")

        login_as(self.client, "E1")
        res = self.client.patch(
            f"{URL}{approval_id}/values/",
            {"values": {"E2": {"1": "1"}}},
            format="json",
        )
        assert res.status_code == 409

    def test_delete_requester_only(self):
        approval_id = self._create().data["id"]
        login_as(self.client, "E3")
        assert self.client.delete(f"{URL}{approval_id}/").status_code == 403
        login_as(self.client, "E1")
        assert self.client.delete(f"{URL}{approval_id}/").status_code == 204
        assert not ApprovalRequest.objects.exists()

    def test_export(self):
        approval_id = self._create().data["id"]
        res = self.client.get(f"{URL}{approval_id}/export/")
        assert res.status_code == 200
        rows = list(csv.reader(io.StringIO(res.content.decode("utf-8-sig"))))
        assert rows == [
            ["성명", "사번", "부서", "팀", "Hours"],
            ["김민수", "E1", "경영지원본부", "인사팀", "4"],
            ["이서연", "E2", "경영지원본부", "인사팀", ""],
        ]
