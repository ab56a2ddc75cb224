"""Serializers for order requests and responses."""

from rest_framework import serializers


class CreateOrderSerializer(serializers.Serializer):
    event_id = serializers.CharField()
    quantity = serializers.IntegerField(min_value=1)


class PaymentSerializer(serializers.Serializer):
    id = serializers.SerializerMethodField()
    reference_id = serializers.CharField()
    payment_url = serializers.CharField()
    amount = serializers.SerializerMethodField()
    currency = serializers.CharField()
    status = serializers.SerializerMethodField()
    expires_at = serializers.DateTimeField()
    paid_at = serializers.DateTimeField()
    payment_method = serializers.CharField(allow_null=True)

    def get_id(self, payment) -> str:
        return str(payment.id)

    def get_amount(self, payment) -> str:
        return f"{payment.amount:.2f}"

    def get_status(self, payment) -> str:
        return payment.status.value


class OrderSerializer(serializers.Serializer):
    """Serializer for the Order domain model."""

    id = serializers.SerializerMethodField()
    order_number = serializers.CharField()
    invoice_number = serializers.CharField()
    event_id = serializers.SerializerMethodField()
    event_title = serializers.CharField()
    quantity = serializers.IntegerField()
    unit_price = serializers.SerializerMethodField()
    total_amount = serializers.SerializerMethodField()
    status = serializers.SerializerMethodField()
    payment_deadline = serializers.DateTimeField()
    created_at = serializers.DateTimeField()

    def get_id(self, order) -> str:
        return str(order.id)

    def get_event_id(self, order) -> str:
        return str(order.event_id)

    def get_unit_price(self, order) -> str:
        return str(order.unit_price)

    def get_total_amount(self, order) -> str:
        return str(order.total_amount)

    def get_status(self, order) -> str:
        return order.status.value
