from django.contrib import admin

from workdesk.documents import models


@admin.register(models.Document)
class DocumentAdmin(admin.ModelAdmin):
    list_display = ["doc_no", "title", "dept", "enforcer_name", "enforced_at"]
    search_fields = ["doc_no", "title", "content", "enforcer_name"]
    list_filter = ["dept"]
