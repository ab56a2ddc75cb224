from django.contrib import admin

from payments.models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ["reference_id", "order", "status", "amount", "currency", "paid_at"]
    list_filter = ["status", "provider"]
    search_fields = ["reference_id", "order__order_number"]
    readonly_fields = ["created_at", "updated_at"]
