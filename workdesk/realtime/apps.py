from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class RealtimeConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "workdesk.realtime"
    verbose_name = _("Realtime")

    def ready(self):
        import workdesk.realtime.signals  # noqa: F401, PLC0415
