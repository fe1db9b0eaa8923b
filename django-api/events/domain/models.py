"""Domain models representing persisted state and creation input.

These are pure domain objects with no HTTP input rules.
Django ORM models are in events/models.py (persistence layer).
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from events.domain.errors import EventValidationError
from events.domain.slugs import base_slug
from events.domain.value_objects import BookingId, Email, EventDate, EventId, EventTime


class EventOrder(Enum):
    """Sort orders supported when listing events."""

    NEWEST = "newest"  # created_at descending
    UPCOMING = "upcoming"  # date, then time, ascending


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    title: str
    slug: str
    description: str
    overview: str
    image: str
    venue: str
    location: str
    date: EventDate
    time: EventTime
    mode: str
    audience: str
    agenda: tuple[str, ...]
    organizer: str
    tags: tuple[str, ...]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class EventRef:
    """Identity of an existing event, as returned by the duplicate check."""

    id: EventId
    slug: str


@dataclass(frozen=True)
class Booking:
    """Domain representation of a Booking."""

    id: BookingId
    event_id: EventId
    email: Email
    created_at: datetime
    updated_at: datetime


TEXT_FIELDS = (
    "title",
    "description",
    "overview",
    "venue",
    "location",
    "date",
    "time",
    "mode",
    "audience",
    "organizer",
)


def _string_list(name: str, value: Any) -> tuple[str, ...]:
    label = name.capitalize()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise EventValidationError(f"{label} must be a list of strings", field=name)
    items = []
    for item in value:
        if not isinstance(item, str):
            raise EventValidationError(f"{label} must be a list of strings", field=name)
        if not item.strip():
            raise EventValidationError(f"{label} items cannot be empty", field=name)
        items.append(item.strip())
    if not items:
        raise EventValidationError(f"{label} must contain at least one item", field=name)
    return tuple(items)


@dataclass(frozen=True)
class EventDraft:
    """Validated, normalized input for a new event.

    Built with ``EventDraft.from_input``; date and time are already
    normalized so the duplicate check compares stored representations.
    """

    title: str
    description: str
    overview: str
    venue: str
    location: str
    date: EventDate
    time: EventTime
    mode: str
    audience: str
    organizer: str
    agenda: tuple[str, ...]
    tags: tuple[str, ...]

    @classmethod
    def from_input(cls, data: dict[str, Any]) -> "EventDraft":
        """Validate raw field values.

        Raises:
            EventValidationError: If a field is missing or malformed.
        """
        text = {}
        for name in TEXT_FIELDS:
            value = data.get(name)
            text[name] = value.strip() if isinstance(value, str) else ""
        missing = [name for name in TEXT_FIELDS if not text[name]]
        if missing:
            raise EventValidationError(
                f"Missing required field(s): {', '.join(missing)}",
                missing=missing,
            )

        if not base_slug(text["title"]):
            raise EventValidationError(
                "Title must contain at least one letter or digit", field="title"
            )

        agenda = _string_list("agenda", data.get("agenda"))
        tags = _string_list("tags", data.get("tags"))

        try:
            event_date = EventDate.parse(text["date"])
        except ValueError as exc:
            raise EventValidationError(str(exc), field="date") from exc
        try:
            event_time = EventTime.parse(text["time"])
        except ValueError as exc:
            raise EventValidationError(str(exc), field="time") from exc

        return cls(
            title=text["title"],
            description=text["description"],
            overview=text["overview"],
            venue=text["venue"],
            location=text["location"],
            date=event_date,
            time=event_time,
            mode=text["mode"],
            audience=text["audience"],
            organizer=text["organizer"],
            agenda=agenda,
            tags=tags,
        )
