"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO

from events.domain import (
    Booking,
    Email,
    Event,
    EventDate,
    EventDraft,
    EventId,
    EventOrder,
    EventRef,
    EventTime,
    Slug,
)


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def list_events(self, order: EventOrder = EventOrder.NEWEST) -> list[Event]:
        """Return all events in the requested order."""
        ...

    @abstractmethod
    def get_by_slug(self, slug: Slug) -> Event | None:
        """Return an event by slug, or None if not found."""
        ...

    @abstractmethod
    def find_duplicate(
        self, title: str, date: EventDate, time: EventTime, venue: str
    ) -> EventRef | None:
        """Return the event with exactly this title, date, time and venue, if any."""
        ...

    @abstractmethod
    def create(self, draft: EventDraft, image_url: str, image_asset: str) -> Event:
        """Persist a new event; the slug is derived from the title during the write.

        Raises:
            StoreError: DUPLICATE_KEY on a uniqueness violation, VALIDATION_ERROR
                on a schema failure.
        """
        ...

    @abstractmethod
    def similar_to(self, slug: Slug) -> list[Event]:
        """Return events sharing a tag with the event at ``slug``, excluding it."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...


class BookingStore(ABC):
    """Interface for booking persistence operations."""

    @abstractmethod
    def exists(self, event_id: EventId, email: Email) -> bool:
        """Check if this email already booked this event."""
        ...

    @abstractmethod
    def create(self, event_id: EventId, email: Email) -> Booking:
        """Persist a booking.

        Raises:
            AlreadyBookedError: If the (event, email) pair already exists.
        """
        ...

    @abstractmethod
    def count_for_event(self, event_id: EventId) -> int:
        """Return how many bookings an event has."""
        ...


@dataclass(frozen=True)
class StoredBlob:
    """A blob saved by the blob store."""

    url: str
    asset_id: str


class BlobStore(ABC):
    """Interface for the object store holding event images."""

    @abstractmethod
    def upload(self, content: BinaryIO, filename: str, namespace: str) -> StoredBlob:
        """Store ``content`` under ``namespace`` and return its public URL and asset id."""
        ...

    @abstractmethod
    def delete(self, asset_id: str) -> None:
        """Remove a stored blob."""
        ...
