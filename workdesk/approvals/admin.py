from django.contrib import admin

from workdesk.approvals import models


@admin.register(models.ApprovalRequest)
class ApprovalRequestAdmin(admin.ModelAdmin):
    list_display = [
        "id",
        "title",
        "template_title",
        "requester_name",
        "processor_name",
        "status",
        "created_at",
    ]
    search_fields = ["title", "template_title", "requester_id", "processor_id"]
    list_filter = ["status"]
