import pytest

from workdesk.collection.models import DataRequest
from workdesk.collection.models import DataResponse
from workdesk.collection.status import ResponseStatus
from workdesk.collection.status import compute_status
from workdesk.collection.status import status_board

ITEMS = [{"id": "1", "name": "Amount", "data_type": "number"}]


@pytest.mark.django_db
class TestComputeStatus:
    def setup_method(self):
        self.request = DataRequest.objects.create(
            title="Q1 headcount",
            requester_id="E3",
            requester_name="박지훈",
            target_ids=["E1", "E2"],
            items=ITEMS,
        )

    def test_request_no_is_derived_from_creation_time(self):
        assert self.request.request_no.startswith("REQ-")
        assert len(self.request.request_no) == len("REQ-") + 6

    def test_non_target_sees_requested(self):
        assert compute_status(self.request, "E3") == ResponseStatus.REQUESTED

    def test_target_without_response_is_not_submitted(self):
        assert compute_status(self.request, "E1") == ResponseStatus.NOT_SUBMITTED

    def test_submitted_and_not_applicable(self):
        DataResponse.objects.create(
            request=self.request, target_id="E1", values={"1": "500"}
        )
        DataResponse.objects.create(
            request=self.request, target_id="E2", not_applicable=True
        )
        assert compute_status(self.request, "E1") == ResponseStatus.SUBMITTED
        assert compute_status(self.request, "E2") == ResponseStatus.NOT_APPLICABLE

    def test_not_applicable_clears_values(self):
        response = DataResponse.objects.create(
            request=self.request,
            target_id="E1",
            values={"1": "500"},
            not_applicable=True,
        )
        response.refresh_from_db()
        assert response.values == {}

    def test_status_board_lists_every_target(self):
        DataResponse.objects.create(
            request=self.request, target_id="E1", target_name="김민수", values={"1": "1"}
        )
        board = status_board(self.request)
        assert [(row["target_id"], row["status"]) for row in board] == [
            ("E1", "submitted"),
            ("E2", "not_submitted"),
        ]
        assert board[1]["target_name"] == "이서연"
        assert board[1]["response_id"] is None
        assert board[0]["status_label"] == "제출완료"
