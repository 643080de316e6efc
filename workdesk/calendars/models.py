from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _


class CalendarTask(models.Model):
    """Date-ranged task written by the external analysis job.

    The console only reads these rows and flips ``is_applied``.
    """

    name = models.CharField(max_length=200)
    start_date = models.DateField(help_text=_("First active day"))
    end_date = models.DateField(help_text=_("Last active day, inclusive"))
    related_system = models.CharField(max_length=100, blank=True, default="")
    is_applied = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "ai_analyzed_tasks"
        ordering = ["start_date", "id"]

    def __str__(self):
        return f"{self.name} ({self.start_date} ~ {self.end_date})"

    def clean(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValidationError(_("Start date cannot be after end date."))
