import uuid

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from workdesk.core.numbering import sequence_number


def default_doc_no() -> str:
    return sequence_number("DOC")


class Document(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    doc_no = models.CharField(
        max_length=50,
        default=default_doc_no,
        help_text=_("Document number, editable"),
    )
    title = models.CharField(max_length=200)
    content = models.TextField(blank=True, default="")
    dept = models.CharField(max_length=100, blank=True, default="")
    enforcer_name = models.CharField(max_length=100)
    enforced_at = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    created_by = models.CharField(max_length=50, blank=True, default="")

    class Meta:
        db_table = "documents"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.doc_no} {self.title}"
