from django.contrib import admin

from workdesk.worktemplates import models


@admin.register(models.WorkTemplate)
class WorkTemplateAdmin(admin.ModelAdmin):
    list_display = ["id", "title", "default_processor_id", "created_at"]
    search_fields = ["title", "description"]
    readonly_fields = ["created_at", "updated_at"]
