"""Booking service: one booking per email per event."""

import logging
from dataclasses import dataclass

from events.domain import Booking, Email, EventId
from events.domain.errors import (
    AlreadyBookedError,
    DomainError,
    EventReferenceError,
    EventValidationError,
)
from events.stores.interfaces import BookingStore, EventStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingOutcome:
    """Result of a booking attempt, for callers that report instead of raise."""

    success: bool
    booking: Booking | None = None
    error: DomainError | None = None


class BookingService:
    """Service for booking creation."""

    def __init__(self, bookings: BookingStore, events: EventStore) -> None:
        self._bookings = bookings
        self._events = events

    def create_booking(self, event_id: str, slug: str, email: str) -> Booking:
        """Book ``email`` onto an event.

        The existence and duplicate checks give friendly errors; the store's
        (event, email) constraint stays the final guard under concurrency.

        Raises:
            EventValidationError: If the event id, slug or email is malformed.
            EventReferenceError: If the event does not exist.
            AlreadyBookedError: If this email already booked the event.
        """
        try:
            parsed_id = EventId.from_string(event_id)
        except (TypeError, ValueError, AttributeError):
            raise EventValidationError("Invalid event ID format", field="eventId") from None
        if not isinstance(slug, str) or not slug.strip():
            raise EventValidationError("Slug is required", field="slug")
        try:
            address = Email.normalize(email)
        except (TypeError, ValueError, AttributeError):
            raise EventValidationError("Please enter a valid email address", field="email") from None

        if not self._events.event_exists(parsed_id):
            logger.info("Booking rejected: event %s does not exist", parsed_id)
            raise EventReferenceError(event_id)
        if self._bookings.exists(parsed_id, address):
            logger.info("Booking rejected: %s already booked event %s", address, parsed_id)
            raise AlreadyBookedError()

        booking = self._bookings.create(parsed_id, address)
        logger.info("Booked %s onto event %s (%s)", address, parsed_id, slug)
        return booking

    def book(self, event_id: str, slug: str, email: str) -> BookingOutcome:
        """Like ``create_booking`` but reports domain errors in the outcome."""
        try:
            booking = self.create_booking(event_id, slug, email)
        except DomainError as exc:
            return BookingOutcome(success=False, error=exc)
        return BookingOutcome(success=True, booking=booking)

    def count_for_event(self, event_id: EventId) -> int:
        return self._bookings.count_for_event(event_id)
