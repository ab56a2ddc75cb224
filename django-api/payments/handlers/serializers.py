"""Serializers for provider callbacks."""

from rest_framework import serializers

from payments.domain import WebhookNotification
from payments.domain.translation import parse_timestamp


class WebhookSerializer(serializers.Serializer):
    """Xendit invoice callback body. Unknown keys are ignored."""

    id = serializers.CharField()
    external_id = serializers.CharField()
    status = serializers.CharField()
    amount = serializers.DecimalField(max_digits=20, decimal_places=2)
    created = serializers.CharField()
    updated = serializers.CharField()
    payment_method = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    paid_at = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    payer_email = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    currency = serializers.CharField(required=False, allow_null=True, allow_blank=True)

    def to_notification(self) -> WebhookNotification:
        data = self.validated_data
        return WebhookNotification(
            id=data["id"],
            external_id=data["external_id"],
            status=data["status"],
            amount=data["amount"],
            created=parse_timestamp(data["created"]),
            updated=parse_timestamp(data["updated"]),
            payment_method=data.get("payment_method") or None,
            paid_at=parse_timestamp(data.get("paid_at")),
            payer_email=data.get("payer_email") or None,
            currency=data.get("currency") or None,
        )
