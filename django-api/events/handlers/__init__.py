from events.handlers.views import (
    BookingCreateView,
    EventDetailView,
    EventListView,
    SimilarEventListView,
)

__all__ = [
    "BookingCreateView",
    "EventDetailView",
    "EventListView",
    "SimilarEventListView",
]
