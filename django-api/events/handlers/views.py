"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain error mapping to events.handlers.exceptions
- Never contain business logic
"""

from collections.abc import Mapping

from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from events.dependencies import get_booking_service, get_event_service
from events.domain import EventOrder
from events.domain.errors import EventValidationError
from events.handlers.exceptions import error_body
from events.handlers.serializers import BookingSerializer, CreateEventSerializer, EventSerializer


def parse_order(raw: str | None) -> EventOrder:
    if not raw:
        return EventOrder.NEWEST
    try:
        return EventOrder(raw.strip().lower())
    except ValueError:
        allowed = ", ".join(order.value for order in EventOrder)
        raise EventValidationError(f"order must be one of: {allowed}", field="order") from None


def failure_body(body: dict) -> dict:
    return {"success": False, "error": body.pop("message", ""), **body}


class EventListView(APIView):
    """Handler for GET and POST /api/events"""

    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get(self, request: Request) -> Response:
        order = parse_order(request.query_params.get("order"))
        events = get_event_service().list_events(order)
        return Response(
            {
                "message": "Events fetched successfully",
                "events": EventSerializer(events, many=True).data,
            }
        )

    def post(self, request: Request) -> Response:
        serializer = CreateEventSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        image = data.pop("image", None)
        event = get_event_service().create_event(data, image, getattr(image, "name", "") or "")
        return Response(
            {"message": "Event created successfully", "event": EventSerializer(event).data},
            status=status.HTTP_201_CREATED,
        )


class EventDetailView(APIView):
    """Handler for GET /api/events/{slug}"""

    def get(self, request: Request, slug: str) -> Response:
        event = get_event_service().get_event(slug)
        bookings = get_booking_service().count_for_event(event.id)
        return Response(
            {
                "message": "Event fetched successfully",
                "event": EventSerializer(event).data,
                "bookings": bookings,
            }
        )


class SimilarEventListView(APIView):
    """Handler for GET /api/events/{slug}/similar"""

    def get(self, request: Request, slug: str) -> Response:
        events = get_event_service().similar_events(slug)
        return Response(
            {
                "message": "Similar events fetched successfully",
                "events": EventSerializer(events, many=True).data,
            }
        )


class BookingCreateView(APIView):
    """Handler for POST /api/bookings

    Every failure, including parse errors, is reported as
    ``{success: false, error, code}``.
    """

    parser_classes = [JSONParser, FormParser, MultiPartParser]

    def post(self, request: Request) -> Response:
        data = request.data
        if not isinstance(data, Mapping):
            raise EventValidationError("Request body must be an object")
        outcome = get_booking_service().book(
            event_id=data.get("eventId"),
            slug=data.get("slug"),
            email=data.get("email"),
        )
        if not outcome.success:
            return Response(failure_body(error_body(outcome.error)), status=outcome.error.status)
        return Response(
            {"success": True, "booking": BookingSerializer(outcome.booking).data},
            status=status.HTTP_201_CREATED,
        )

    def handle_exception(self, exc: Exception) -> Response:
        response = super().handle_exception(exc)
        response.data = failure_body(dict(response.data))
        return response
