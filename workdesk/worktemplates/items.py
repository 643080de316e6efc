"""Typed input-item definitions.

An item list is stored as embedded JSON on templates, collection requests and
approval requests::

    [{"id": "1", "name": "Amount", "data_type": "number"}, ...]

Each ``data_type`` has its own value coercer; submitted values are always
kept as strings keyed by the item ``id``.
"""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from decimal import InvalidOperation
from typing import Any

from django.db import models
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

DEFAULT_SELECT_OPTIONS = ["예", "아니오"]


class ItemType(models.TextChoices):
    TEXT = "text", _("Text")
    NUMBER = "number", _("Number")
    DATE = "date", _("Date")
    SELECT = "select", _("Select")


def new_item_id() -> str:
    return uuid.uuid4().hex[:12]


def _item_type(raw: dict) -> str:
    # Older console payloads send `dataType`; `type` is accepted as shorthand.
    value = raw.get("data_type") or raw.get("dataType") or raw.get("type")
    return str(value or ItemType.TEXT.value).strip().lower()


def _select_options(raw: dict) -> list[str]:
    options = raw.get("options")
    if options in (None, ""):
        return list(DEFAULT_SELECT_OPTIONS)
    if not isinstance(options, list):
        msg = "select options must be a list"
        raise serializers.ValidationError(msg)
    cleaned = [str(o).strip() for o in options if str(o).strip()]
    if not cleaned:
        msg = "select items need at least one option"
        raise serializers.ValidationError(msg)
    return cleaned


def normalize_item(raw: Any) -> dict:
    if not isinstance(raw, dict):
        msg = "items must be objects"
        raise serializers.ValidationError(msg)
    name = str(raw.get("name") or "").strip()
    if not name:
        msg = _("Every item needs a name.")
        raise serializers.ValidationError(msg)
    data_type = _item_type(raw)
    if data_type not in ItemType.values:
        msg = f"Unsupported item type: {data_type}"
        raise serializers.ValidationError(msg)
    item = {
        "id": str(raw["id"]).strip() if raw.get("id") not in (None, "") else new_item_id(),
        "name": name,
        "data_type": data_type,
    }
    if data_type == ItemType.SELECT:
        item["options"] = _select_options(raw)
    return item


def normalize_item_definitions(raw_items: Any) -> list[dict]:
    """Validate an item list and return it in canonical form.

    Rules: at least one item, every item named, ids unique within the list.
    """
    if not isinstance(raw_items, list):
        msg = "items must be an array"
        raise serializers.ValidationError(msg)
    if not raw_items:
        msg = _("At least one item is required.")
        raise serializers.ValidationError(msg)
    items = [normalize_item(raw) for raw in raw_items]
    ids = [item["id"] for item in items]
    if len(set(ids)) != len(ids):
        msg = "item ids must be unique"
        raise serializers.ValidationError(msg)
    return items


def _coerce_number(item: dict, value: str) -> str:
    try:
        number = Decimal(value)
    except InvalidOperation as exc:
        msg = f"{item['name']}: enter a number."
        raise serializers.ValidationError(msg) from exc
    if not number.is_finite():
        msg = f"{item['name']}: enter a number."
        raise serializers.ValidationError(msg)
    return value


def _coerce_date(item: dict, value: str) -> str:
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError as exc:
        msg = f"{item['name']}: enter a date as YYYY-MM-DD."
        raise serializers.ValidationError(msg) from exc


def _coerce_select(item: dict, value: str) -> str:
    options = item.get("options") or DEFAULT_SELECT_OPTIONS
    if value not in options:
        msg = f"{item['name']}: choose one of {', '.join(options)}."
        raise serializers.ValidationError(msg)
    return value


_COERCERS = {
    ItemType.NUMBER.value: _coerce_number,
    ItemType.DATE.value: _coerce_date,
    ItemType.SELECT.value: _coerce_select,
}


def coerce_value(item: dict, raw: Any) -> str:
    """Validate one submitted value against its item type.

    Empty input is always allowed and means "not filled".
    """
    value = "" if raw is None else str(raw).strip()
    if not value:
        return ""
    coercer = _COERCERS.get(item.get("data_type"))
    return coercer(item, value) if coercer else value


def coerce_values(items: list[dict], values: Any) -> dict[str, str]:
    if values in (None, ""):
        return {}
    if not isinstance(values, dict):
        msg = "values must be an object keyed by item id"
        raise serializers.ValidationError(msg)
    by_id = {item["id"]: item for item in items}
    unknown = sorted(str(key) for key in values if str(key) not in by_id)
    if unknown:
        msg = f"Unknown item ids: {', '.join(unknown)}"
        raise serializers.ValidationError(msg)
    provided = {str(key): value for key, value in values.items()}
    return {
        item["id"]: coerce_value(item, provided[item["id"]])
        for item in items
        if item["id"] in provided
    }
