from django.contrib import admin

from orders.models import Order


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = [
        "order_number",
        "user",
        "event",
        "quantity",
        "total_amount",
        "status",
        "payment_deadline",
    ]
    list_filter = ["status"]
    search_fields = ["order_number", "invoice_number", "user__email"]
    readonly_fields = ["order_number", "invoice_number", "status", "created_at", "updated_at"]
