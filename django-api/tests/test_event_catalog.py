"""Integration tests for the event catalog read API.

Run with: pytest tests/test_event_catalog.py -v
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.cache import cache
from django.utils import timezone
from rest_framework.test import APIClient

from events import cache as event_cache
from events.models import Event


@pytest.mark.django_db
class TestEventList:
    """Tests for GET /api/events"""

    def test_list_events_returns_published_events(self, api_client: APIClient, event_row):
        """Given published and draft events, returns only the published ones."""
        Event.objects.create(
            title="Rehearsal",
            price=Decimal("0"),
            starts_at=timezone.now() + timedelta(days=1),
            capacity=5,
        )

        response = api_client.get("/api/events")

        assert response.status_code == 200
        results = response.json()["results"]
        assert [e["title"] for e in results] == ["Jazz Night"]
        assert results[0]["price"] == "150000.00"
        assert results[0]["available_quota"] == 10
        assert results[0]["status"] == "published"

    def test_list_events_empty_catalog(self, api_client: APIClient, db):
        """Given no events, returns empty list."""
        response = api_client.get("/api/events")
        assert response.json() == {"results": []}

    def test_list_events_cached_response(self, api_client: APIClient, db):
        """Given cached data, returns from cache."""
        cache.set(event_cache.EVENT_LIST_KEY, [{"title": "From cache"}], 60)
        response = api_client.get("/api/events")
        assert response.json() == {"results": [{"title": "From cache"}]}


@pytest.mark.django_db
class TestEventDetail:
    """Tests for GET /api/events/{id}"""

    def test_get_event_returns_details(self, api_client: APIClient, event_row):
        """Given event exists, returns event details."""
        response = api_client.get(f"/api/events/{event_row.pk}")

        assert response.status_code == 200
        assert response.json()["id"] == str(event_row.pk)
        assert response.json()["capacity"] == 10

    def test_get_event_not_found(self, api_client: APIClient):
        """Given event does not exist, returns 404."""
        response = api_client.get(f"/api/events/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json()["code"] == "EVENT_NOT_FOUND"

    def test_get_event_invalid_id_format(self, api_client: APIClient):
        """Given invalid UUID, returns 400."""
        response = api_client.get("/api/events/not-a-uuid")
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_EVENT_ID"
