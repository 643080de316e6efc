import csv
import io

import pytest

from workdesk.collection.exports import export_filename
from workdesk.collection.exports import export_to_csv
from workdesk.collection.exports import filter_for_export
from workdesk.collection.models import DataRequest
from workdesk.collection.models import DataResponse
from workdesk.core.exports import UTF8_BOM

ITEMS = [
    {"id": "1", "name": "Amount", "data_type": "number"},
    {"id": "2", "name": "Memo", "data_type": "text"},
]


def _rows(text: str) -> list[list[str]]:
    assert text.startswith(UTF8_BOM)
    return list(csv.reader(io.StringIO(text[len(UTF8_BOM) :])))


@pytest.mark.django_db
class TestExport:
    def setup_method(self):
        self.request = DataRequest.objects.create(
            title="비품 수요조사",
            requester_id="E3",
            target_ids=["E1", "E2", "E4"],
            items=ITEMS,
        )
        DataResponse.objects.create(
            request=self.request, target_id="E1", target_name="김민수", values={"1": "500"}
        )
        DataResponse.objects.create(
            request=self.request, target_id="E2", target_name="이서연", not_applicable=True
        )

    def test_columns_follow_item_order(self):
        rows = _rows(export_to_csv(self.request, self.request.responses.all()))
        assert rows[0] == ["제출자", "사번", "Amount", "Memo", "상태", "제출시간"]

    def test_one_row_per_response(self):
        responses = filter_for_export(self.request.responses.all())
        rows = _rows(export_to_csv(self.request, responses))[1:]
        assert len(rows) == 2
        by_id = {row[1]: row for row in rows}
        assert by_id["E1"][2:5] == ["500", "", "제출완료"]
        assert by_id["E2"][2:5] == ["-", "-", "해당없음"]

    def test_exclusion_drops_not_applicable_rows(self):
        responses = filter_for_export(self.request.responses.all(), True)
        rows = _rows(export_to_csv(self.request, responses))[1:]
        assert [row[1] for row in rows] == ["E1"]

    def test_filename(self):
        assert export_filename(self.request) == "비품 수요조사_결과.csv"
        assert export_filename(self.request, True) == "비품 수요조사_결과_해당없음제외.csv"
