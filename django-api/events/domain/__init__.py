from events.domain.models import Booking, Event, EventDraft, EventOrder, EventRef
from events.domain.value_objects import BookingId, Email, EventDate, EventId, EventTime, Slug

__all__ = [
    "Booking",
    "Event",
    "EventDraft",
    "EventOrder",
    "EventRef",
    "BookingId",
    "EventId",
    "Email",
    "EventDate",
    "EventTime",
    "Slug",
]
