"""Item-list edits on a stored template."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.db import transaction
from django.utils.translation import gettext_lazy as _
from rest_framework.exceptions import NotFound
from rest_framework.exceptions import ValidationError

from workdesk.worktemplates.items import normalize_item

if TYPE_CHECKING:
    from workdesk.worktemplates.models import WorkTemplate

logger = logging.getLogger(__name__)


@transaction.atomic
def add_item(template: WorkTemplate, raw_item: dict) -> WorkTemplate:
    item = normalize_item(raw_item)
    if template.item_by_id(item["id"]) is not None:
        raise ValidationError({"id": [f"Item {item['id']} already exists."]})
    template.items = [*template.items, item]
    template.save(update_fields=["items", "updated_at"])
    logger.info("Template %s: added item %s", template.pk, item["id"])
    return template


@transaction.atomic
def remove_item(template: WorkTemplate, item_id: str) -> WorkTemplate:
    """Drop one item; a template always keeps at least one."""
    if template.item_by_id(item_id) is None:
        raise NotFound(_("Item not found."))
    if len(template.items) <= 1:
        raise ValidationError(_("A template must keep at least one item."))
    template.items = [i for i in template.items if i.get("id") != item_id]
    template.save(update_fields=["items", "updated_at"])
    logger.info("Template %s: removed item %s", template.pk, item_id)
    return template
