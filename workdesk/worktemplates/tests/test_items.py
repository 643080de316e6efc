import pytest
from rest_framework.exceptions import ValidationError

from workdesk.worktemplates.items import DEFAULT_SELECT_OPTIONS
from workdesk.worktemplates.items import coerce_value
from workdesk.worktemplates.items import coerce_values
from workdesk.worktemplates.items import normalize_item
from workdesk.worktemplates.items import normalize_item_definitions

NUMBER = {"id": "1", "name": "Amount", "data_type": "number"}
DATE = {"id": "2", "name": "Due", "data_type": "date"}
SELECT = {"id": "3", "name": "Done", "data_type": "select", "options": ["예", "아니오"]}


class TestNormalize:
    def test_accepts_camel_case_type_key(self):
        item = normalize_item({"id": "1", "name": "Amount", "dataType": "number"})
        assert item == NUMBER

    def test_defaults_to_text_and_generates_id(self):
        item = normalize_item({"name": "Memo"})
        assert item["data_type"] == "text"
        assert item["id"]

    def test_select_gets_default_options(self):
        item = normalize_item({"name": "Agree", "type": "select"})
        assert item["options"] == DEFAULT_SELECT_OPTIONS

    @pytest.mark.parametrize(
        "raw",
        [
            {"name": ""},
            {"name": "   "},
            {"name": "x", "data_type": "file"},
            "not-an-object",
        ],
    )
    def test_rejects_bad_items(self, raw):
        with pytest.raises(ValidationError):
            normalize_item(raw)

    def test_list_must_not_be_empty(self):
        with pytest.raises(ValidationError):
            normalize_item_definitions([])

    def test_ids_must_be_unique(self):
        with pytest.raises(ValidationError):
            normalize_item_definitions([{"id": "1", "name": "a"}, {"id": "1", "name": "b"}])


class TestCoerce:
    def test_empty_is_always_allowed(self):
        assert coerce_value(NUMBER, "") == ""
        assert coerce_value(DATE, None) == ""

    def test_number(self):
        assert coerce_value(NUMBER, "500") == "500"
        assert coerce_value(NUMBER, " 12.5 ") == "12.5"
        with pytest.raises(ValidationError):
            coerce_value(NUMBER, "five hundred")
        with pytest.raises(ValidationError):
            coerce_value(NUMBER, "NaN")

    def test_date(self):
        assert coerce_value(DATE, "2026-03-01") == "2026-03-01"
        with pytest.raises(ValidationError):
            coerce_value(DATE, "03/01/2026")

    def test_select(self):
        assert coerce_value(SELECT, "예") == "예"
        with pytest.raises(ValidationError):
            coerce_value(SELECT, "maybe")

    def test_values_follow_item_order_and_reject_unknown_keys(self):
        values = coerce_values([NUMBER, DATE], {"2": "2026-01-02", "1": "7"})
        assert list(values) == ["1", "2"]
        with pytest.raises(ValidationError):
            coerce_values([NUMBER], {"9": "x"})
