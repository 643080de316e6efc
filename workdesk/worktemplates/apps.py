from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class WorkTemplatesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "workdesk.worktemplates"
    verbose_name = _("Work templates")
