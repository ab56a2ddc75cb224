"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses (common.exceptions)
- Never contain business logic
- Never expose internal error details
"""

from django.core.cache import cache
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from events import cache as event_cache
from events.handlers.serializers import EventSerializer
from events.services import EventService
from events.stores.django_store import DjangoEventStore


def get_service() -> EventService:
    return EventService(DjangoEventStore())


class EventListView(APIView):
    """Handler for GET /api/events"""

    permission_classes = [AllowAny]

    def get(self, request: Request) -> Response:
        data = cache.get(event_cache.EVENT_LIST_KEY)
        if data is None:
            events = get_service().list_events()
            data = EventSerializer(events, many=True).data
            cache.set(event_cache.EVENT_LIST_KEY, data, event_cache.CACHE_TTL_SECONDS)
        return Response({"results": data})


class EventDetailView(APIView):
    """Handler for GET /api/events/{event_id}"""

    permission_classes = [AllowAny]

    def get(self, request: Request, event_id: str) -> Response:
        key = event_cache.event_detail_key(event_id)
        data = cache.get(key)
        if data is None:
            event = get_service().get_event(event_id)
            data = EventSerializer(event).data
            cache.set(key, data, event_cache.CACHE_TTL_SECONDS)
        return Response(data)
