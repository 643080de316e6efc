import uuid

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from workdesk.core.numbering import sequence_number


class DataRequest(models.Model):
    """A data-collection request addressed to one or more roster employees.

    ``items`` is a copy of the item definitions taken when the request was
    created; later template edits never reach it.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    request_no = models.CharField(max_length=20, blank=True, default="")
    title = models.CharField(max_length=200)
    requester_id = models.CharField(max_length=50, db_index=True)
    requester_name = models.CharField(max_length=100, blank=True, default="")
    template_id = models.UUIDField(
        null=True,
        blank=True,
        help_text=_("Source template, informational only"),
    )
    target_ids = models.JSONField(default=list, help_text=_("Roster employee IDs"))
    items = models.JSONField(default=list, help_text=_("Item definition snapshot"))
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "requests"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.request_no} {self.title}"

    def save(self, *args, **kwargs):
        if not self.request_no:
            self.request_no = sequence_number("REQ", self.created_at)
        super().save(*args, **kwargs)

    def is_target(self, employee_id: str) -> bool:
        return str(employee_id) in {str(t) for t in self.target_ids}


class DataResponse(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    request = models.ForeignKey(
        DataRequest,
        on_delete=models.CASCADE,
        related_name="responses",
    )
    target_id = models.CharField(max_length=50)
    target_name = models.CharField(max_length=100, blank=True, default="")
    values = models.JSONField(default=dict, blank=True)
    not_applicable = models.BooleanField(default=False)
    submitted_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "responses"
        ordering = ["-submitted_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["request", "target_id"],
                name="unique_response_per_target",
            ),
        ]

    def __str__(self):
        return f"{self.target_id} -> {self.request_id}"

    def save(self, *args, **kwargs):
        if self.not_applicable:
            self.values = {}
        super().save(*args, **kwargs)
