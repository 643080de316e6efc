from django.contrib import admin

from workdesk.calendars import models


@admin.register(models.CalendarTask)
class CalendarTaskAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "start_date", "end_date", "related_system", "is_applied"]
    search_fields = ["name", "related_system"]
    list_filter = ["is_applied", "related_system", "start_date"]
