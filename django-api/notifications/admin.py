from django.contrib import admin

from notifications.models import EmailNotification


@admin.register(EmailNotification)
class EmailNotificationAdmin(admin.ModelAdmin):
    list_display = ["kind", "recipient", "status", "order_number", "created_at"]
    list_filter = ["status", "kind"]
    search_fields = ["recipient", "order_number"]
    readonly_fields = ["kind", "recipient", "subject", "status", "error", "order_number", "created_at"]
