import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _


class WorkTemplate(models.Model):
    """Reusable task definition: a title plus an ordered list of typed items.

    ``items`` holds item definitions as produced by
    :func:`workdesk.worktemplates.items.normalize_item_definitions`. Requests
    copy this list at creation time and never read it back.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    items = models.JSONField(default=list, help_text=_("Ordered item definitions"))
    default_processor_id = models.CharField(
        max_length=50,
        blank=True,
        default="",
        help_text=_("Roster employee ID pre-filled as approval processor"),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "work_templates"
        ordering = ["-created_at"]

    def __str__(self):
        return self.title

    def item_by_id(self, item_id: str) -> dict | None:
        return next((i for i in self.items if i.get("id") == item_id), None)
