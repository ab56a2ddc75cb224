"""Serializers for transforming domain models to API responses."""

from rest_framework import serializers


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.SerializerMethodField()
    title = serializers.CharField()
    description = serializers.CharField()
    location = serializers.CharField()
    price = serializers.SerializerMethodField()
    starts_at = serializers.DateTimeField()
    capacity = serializers.SerializerMethodField()
    available_quota = serializers.SerializerMethodField()
    status = serializers.SerializerMethodField()

    def get_id(self, event) -> str:
        return str(event.id)

    def get_price(self, event) -> str:
        return str(event.price)

    def get_capacity(self, event) -> int:
        return event.capacity.value

    def get_available_quota(self, event) -> int:
        return event.available_quota.value

    def get_status(self, event) -> str:
        return event.status.value
