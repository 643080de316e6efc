from django.contrib import admin

from workdesk.collection import models


class DataResponseInline(admin.TabularInline):
    model = models.DataResponse
    extra = 0
    fields = ["target_id", "target_name", "not_applicable", "values", "submitted_at"]


@admin.register(models.DataRequest)
class DataRequestAdmin(admin.ModelAdmin):
    list_display = ["request_no", "title", "requester_id", "requester_name", "created_at"]
    search_fields = ["request_no", "title", "requester_id", "requester_name"]
    list_filter = ["created_at"]
    inlines = [DataResponseInline]


@admin.register(models.DataResponse)
class DataResponseAdmin(admin.ModelAdmin):
    list_display = ["id", "request", "target_id", "target_name", "not_applicable", "submitted_at"]
    search_fields = ["target_id", "target_name", "request__title"]
    list_filter = ["not_applicable"]
