from django.db.models.signals import post_delete
from django.db.models.signals import post_save
from django.db.transaction import on_commit
from django.dispatch import receiver

from workdesk.realtime.events.tables import DELETE
from workdesk.realtime.events.tables import INSERT
from workdesk.realtime.events.tables import UPDATE
from workdesk.realtime.events.tables import publish_table_change
from workdesk.realtime.socketio import SUBSCRIBABLE_TABLES


def _tracked_table(sender) -> str | None:
    table = getattr(getattr(sender, "_meta", None), "db_table", None)
    return table if table in SUBSCRIBABLE_TABLES else None


@receiver(post_save, dispatch_uid="workdesk_realtime_post_save")
def publish_saved_row(sender, instance, created, raw=False, **kwargs):
    table = _tracked_table(sender)
    if table is None or raw:
        return
    event = INSERT if created else UPDATE
    pk = instance.pk
    on_commit(lambda: publish_table_change(table, event, pk))


@receiver(post_delete, dispatch_uid="workdesk_realtime_post_delete")
def publish_deleted_row(sender, instance, **kwargs):
    table = _tracked_table(sender)
    if table is None:
        return
    pk = instance.pk
    on_commit(lambda: publish_table_change(table, DELETE, pk))
