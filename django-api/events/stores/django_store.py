"""Django ORM implementations of the EventStore and BookingStore.

Each store is bound to one database alias at construction and runs every
query through it. Raw ORM exceptions are translated by the error normalizer
at the boundary of each public operation.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DEFAULT_DB_ALIAS, DatabaseError, IntegrityError, transaction

from events import models
from events.domain import (
    Booking,
    BookingId,
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
from events.domain.errors import AlreadyBookedError, ErrorCode
from events.stores.error_mapping import normalize_store_error
from events.stores.interfaces import BookingStore, EventStore

logger = logging.getLogger(__name__)

ORDERINGS = {
    EventOrder.NEWEST: ("-created_at",),
    EventOrder.UPCOMING: ("date", "time", "created_at"),
}


@contextmanager
def translate_store_errors() -> Iterator[None]:
    """Re-raise recognized ORM failures as normalized StoreErrors."""
    try:
        yield
    except (DatabaseError, DjangoValidationError, ValueError) as exc:
        normalized = normalize_store_error(exc)
        if normalized is None:
            raise
        raise normalized.to_domain_error() from exc


def to_domain_event(row: models.Event) -> Event:
    return Event(
        id=EventId(row.id),
        title=row.title,
        slug=row.slug,
        description=row.description,
        overview=row.overview,
        image=row.image,
        venue=row.venue,
        location=row.location,
        date=EventDate(row.date),
        time=EventTime(row.time),
        mode=row.mode,
        audience=row.audience,
        agenda=tuple(row.agenda),
        organizer=row.organizer,
        tags=tuple(row.tags),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def to_domain_booking(row: models.Booking) -> Booking:
    return Booking(
        id=BookingId(row.id),
        event_id=EventId(row.event_id),
        email=Email(row.email),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class DjangoEventStore(EventStore):
    """Relational event store using the Django ORM."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        self._using = using

    def _events(self):
        return models.Event.objects.using(self._using)

    def list_events(self, order: EventOrder = EventOrder.NEWEST) -> list[Event]:
        with translate_store_errors():
            rows = list(self._events().order_by(*ORDERINGS[order]))
        return [to_domain_event(row) for row in rows]

    def get_by_slug(self, slug: Slug) -> Event | None:
        with translate_store_errors():
            row = self._events().filter(slug=slug.value).first()
        return to_domain_event(row) if row is not None else None

    def find_duplicate(
        self, title: str, date: EventDate, time: EventTime, venue: str
    ) -> EventRef | None:
        with translate_store_errors():
            match = (
                self._events()
                .filter(title=title, date=date.value, time=time.value, venue=venue)
                .values("id", "slug")
                .first()
            )
        if match is None:
            return None
        return EventRef(id=EventId(match["id"]), slug=match["slug"])

    def create(self, draft: EventDraft, image_url: str, image_asset: str) -> Event:
        row = models.Event(
            title=draft.title,
            description=draft.description,
            overview=draft.overview,
            image=image_url,
            image_asset=image_asset,
            venue=draft.venue,
            location=draft.location,
            date=draft.date.value,
            time=draft.time.value,
            mode=draft.mode,
            audience=draft.audience,
            agenda=list(draft.agenda),
            organizer=draft.organizer,
            tags=list(draft.tags),
        )
        with translate_store_errors():
            # Uniqueness is left to the database constraints.
            row.full_clean(exclude=["slug"], validate_unique=False, validate_constraints=False)
            with transaction.atomic(using=self._using):
                row.save(using=self._using)
        logger.info("Stored event %s with slug %s", row.id, row.slug)
        return to_domain_event(row)

    def similar_to(self, slug: Slug) -> list[Event]:
        with translate_store_errors():
            source = self._events().filter(slug=slug.value).first()
            if source is None:
                return []
            candidates = list(self._events().exclude(pk=source.pk).order_by("-created_at"))
        shared = set(source.tags)
        return [to_domain_event(row) for row in candidates if shared.intersection(row.tags)]

    def event_exists(self, event_id: EventId) -> bool:
        with translate_store_errors():
            return self._events().filter(pk=event_id.value).exists()


class DjangoBookingStore(BookingStore):
    """Relational booking store using the Django ORM."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        self._using = using

    def _bookings(self):
        return models.Booking.objects.using(self._using)

    def exists(self, event_id: EventId, email: Email) -> bool:
        with translate_store_errors():
            return self._bookings().filter(event_id=event_id.value, email=email.value).exists()

    def create(self, event_id: EventId, email: Email) -> Booking:
        row = models.Booking(event_id=event_id.value, email=email.value)
        try:
            with transaction.atomic(using=self._using):
                row.save(using=self._using)
        except IntegrityError as exc:
            normalized = normalize_store_error(exc)
            if normalized is not None and normalized.code is ErrorCode.DUPLICATE_KEY:
                raise AlreadyBookedError() from exc
            raise
        return to_domain_booking(row)

    def count_for_event(self, event_id: EventId) -> int:
        with translate_store_errors():
            return self._bookings().filter(event_id=event_id.value).count()
