from django.contrib import admin

from events.models import Event


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "status", "starts_at", "price", "available_quota", "capacity"]
    list_filter = ["status"]
    search_fields = ["title", "location"]
    readonly_fields = ["available_quota", "created_at", "updated_at"]
