import uuid

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class ApprovalRequest(models.Model):
    """Single-processor approval of per-employee line items.

    Line items live in ``employees``: one roster snapshot per employee plus a
    ``values`` mapping keyed by item id. There is no separate response row.
    """

    class Status(models.TextChoices):
        PENDING = "pending", _("대기")
        APPROVED = "approved", _("승인")
        # No transition leads here yet.
        REJECTED = "rejected", _("반려")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    template_id = models.UUIDField(null=True, blank=True)
    template_title = models.CharField(max_length=200, blank=True, default="")
    items = models.JSONField(default=list, help_text=_("Item definition snapshot"))
    title = models.CharField(max_length=200)

    requester_id = models.CharField(max_length=50, db_index=True)
    requester_name = models.CharField(max_length=100, blank=True, default="")
    requester_position = models.CharField(max_length=100, blank=True, default="")
    requester_team = models.CharField(max_length=100, blank=True, default="")

    processor_id = models.CharField(max_length=50, db_index=True)
    processor_name = models.CharField(max_length=100, blank=True, default="")
    processor_position = models.CharField(max_length=100, blank=True, default="")
    processor_team = models.CharField(max_length=100, blank=True, default="")

    employees = models.JSONField(default=list, blank=True)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "work_app_requests"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.title} ({self.get_status_display()})"

    @property
    def is_pending(self) -> bool:
        return self.status == self.Status.PENDING
