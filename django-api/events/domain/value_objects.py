"""Domain primitives that enforce validity at creation time."""

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Self
from urllib.parse import unquote
from uuid import UUID

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
SLUG_MAX_LENGTH = 200
TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BookingId:
    """Unique identifier for a Booking."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Slug:
    """Public URL slug: lowercase letters, digits and single hyphens."""

    value: str

    def __post_init__(self) -> None:
        if len(self.value) > SLUG_MAX_LENGTH:
            raise ValueError("Slug is too long")
        if not SLUG_PATTERN.match(self.value):
            raise ValueError(
                "Invalid slug format. Use lowercase letters, numbers, and hyphens only."
            )

    @classmethod
    def from_route(cls, raw: str) -> Self:
        """Decode, trim and lower-case a route parameter before validating it."""
        return cls(value=unquote(raw, errors="strict").strip().lower())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class EventDate:
    """Calendar date of an event, serialized as YYYY-MM-DD."""

    value: date

    @classmethod
    def parse(cls, raw: str) -> Self:
        text = raw.strip()
        try:
            return cls(value=date.fromisoformat(text))
        except ValueError:
            pass
        try:
            return cls(value=datetime.fromisoformat(text).date())
        except ValueError:
            raise ValueError("Date must be a valid date format") from None

    def __str__(self) -> str:
        return self.value.isoformat()


@dataclass(frozen=True)
class EventTime:
    """24-hour time of day, serialized as HH:MM."""

    value: time

    @classmethod
    def parse(cls, raw: str) -> Self:
        match = TIME_PATTERN.match(raw.strip())
        if not match:
            raise ValueError("Time must be in HH:MM format (e.g., 14:30)")
        return cls(value=time(int(match.group(1)), int(match.group(2))))

    def __str__(self) -> str:
        return self.value.strftime("%H:%M")


@dataclass(frozen=True)
class Email:
    """Trimmed, lower-cased email address."""

    value: str

    def __post_init__(self) -> None:
        if not EMAIL_PATTERN.match(self.value):
            raise ValueError("Please provide a valid email address")

    @classmethod
    def normalize(cls, raw: str) -> Self:
        return cls(value=raw.strip().lower())

    def __str__(self) -> str:
        return self.value
