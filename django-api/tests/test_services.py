"""Unit tests for EventService and BookingService.

These test orchestration order, compensation and domain error mapping.
Run with: pytest tests/test_services.py -v
"""

import logging
import uuid

import pytest

from events.domain import EventDraft
from events.domain.errors import (
    AlreadyBookedError,
    DuplicateEventError,
    ErrorCode,
    EventNotFoundError,
    EventReferenceError,
    EventValidationError,
    InvalidSlugError,
    MissingImageError,
    MissingSlugError,
    StoreError,
    UploadError,
)
from events.services.booking_service import BookingService
from events.services.event_service import parse_slug
from events.stores.django_store import DjangoBookingStore, DjangoEventStore


def actions(journal: list) -> list[str]:
    return [entry[0] for entry in journal]


class TestParseSlug:
    """Tests for parse_slug."""

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_missing(self, raw):
        """An absent or blank slug is MISSING_SLUG."""
        with pytest.raises(MissingSlugError):
            parse_slug(raw)

    @pytest.mark.parametrize("raw", ["Bad_Slug", "double--dash", "x" * 201])
    def test_invalid(self, raw):
        """Malformed or oversized slugs are INVALID_SLUG."""
        with pytest.raises(InvalidSlugError) as excinfo:
            parse_slug(raw)
        assert excinfo.value.status == 400

    def test_bad_percent_encoding(self):
        """Undecodable escapes are INVALID_SLUG."""
        with pytest.raises(InvalidSlugError, match="encoding"):
            parse_slug("caf%E9")

    def test_normalizes(self):
        """Route slugs are decoded, trimmed and lower-cased."""
        assert parse_slug(" Python-Meetup ").value == "python-meetup"


class TestCreateEvent:
    """Tests for EventService.create_event."""

    def test_creates_event_with_uploaded_image(
        self, event_service, blob_store, journal, event_data, image_factory
    ):
        """A valid request uploads once and stores the blob URL."""
        event = event_service.create_event(event_data, image_factory(), "cover.png")
        assert event.slug == "python-meetup-berlin"
        assert event.image == "https://blobs.test/DevEvent/1-cover.png"
        assert actions(journal) == ["find_duplicate", "upload", "create"]
        assert list(blob_store.blobs) == ["DevEvent/1-cover.png"]

    def test_missing_image(self, event_service, journal, event_data):
        """No image is MISSING_IMAGE before anything else runs."""
        with pytest.raises(MissingImageError) as excinfo:
            event_service.create_event(event_data, None)
        assert excinfo.value.status == 400
        assert journal == []

    def test_empty_agenda_never_uploads(self, event_service, journal, event_data, image_factory):
        """Validation failures happen before the upload."""
        event_data["agenda"] = []
        with pytest.raises(EventValidationError) as excinfo:
            event_service.create_event(event_data, image_factory(), "cover.png")
        assert excinfo.value.code is ErrorCode.VALIDATION_ERROR
        assert "upload" not in actions(journal)

    def test_preflight_duplicate(self, event_service, blob_store, journal, event_data, image_factory):
        """An existing (title, date, time, venue) is DUPLICATE_EVENT without an upload."""
        first = event_service.create_event(event_data, image_factory(), "cover.png")
        journal.clear()
        with pytest.raises(DuplicateEventError) as excinfo:
            event_service.create_event(event_data, image_factory(), "cover.png")
        assert excinfo.value.status == 409
        assert excinfo.value.details["existing"] == {"id": str(first.id), "slug": first.slug}
        assert excinfo.value.details["fields"] == ["title", "date", "time", "venue"]
        assert actions(journal) == ["find_duplicate"]
        assert len(blob_store.blobs) == 1

    def test_upload_failure_skips_create(
        self, event_service, blob_store, journal, event_data, image_factory
    ):
        """A failed upload is UPLOAD_ERROR and no record is written."""
        blob_store.upload_error = ConnectionError("provider unreachable")
        with pytest.raises(UploadError) as excinfo:
            event_service.create_event(event_data, image_factory(), "cover.png")
        assert excinfo.value.status == 502
        assert excinfo.value.details == {"error": "provider unreachable"}
        assert actions(journal) == ["find_duplicate", "upload"]

    def test_create_failure_rolls_back_upload(
        self, event_service, memory_store, blob_store, journal, event_data, image_factory
    ):
        """A store failure deletes the uploaded blob and re-raises the store error."""
        failure = StoreError(ErrorCode.DUPLICATE_KEY, "Duplicate value for unique field(s): slug")
        memory_store.create_error = failure
        with pytest.raises(StoreError) as excinfo:
            event_service.create_event(event_data, image_factory(), "cover.png")
        assert excinfo.value is failure
        assert actions(journal) == ["find_duplicate", "upload", "create", "delete"]
        assert journal[-1] == ("delete", "DevEvent/1-cover.png")
        assert blob_store.blobs == {}

    def test_rollback_failure_is_logged_not_raised(
        self, event_service, memory_store, blob_store, journal, event_data, image_factory, caplog
    ):
        """A failed rollback is logged and the store error still propagates."""
        memory_store.create_error = RuntimeError("connection reset")
        blob_store.delete_error = ConnectionError("blob store down")
        with caplog.at_level(logging.WARNING, logger="events.services.uploads"):
            with pytest.raises(RuntimeError, match="connection reset"):
                event_service.create_event(event_data, image_factory(), "cover.png")
        assert actions(journal)[-1] == "delete"
        assert "Rollback of uploaded image DevEvent/1-cover.png failed" in caplog.text


class TestReadEvents:
    """Tests for EventService reads."""

    def test_get_event(self, event_service, event_data, image_factory):
        """get_event returns the event for its slug."""
        created = event_service.create_event(event_data, image_factory(), "cover.png")
        assert event_service.get_event("Python-Meetup-Berlin").id == created.id

    def test_get_event_not_found(self, event_service):
        """get_event raises EventNotFoundError when the store returns None."""
        with pytest.raises(EventNotFoundError) as excinfo:
            event_service.get_event("nothing-here")
        assert excinfo.value.status == 404
        assert excinfo.value.message == "Event not found for slug: nothing-here"

    def test_get_event_invalid_slug(self, event_service):
        """get_event rejects malformed slugs before querying."""
        with pytest.raises(InvalidSlugError):
            event_service.get_event("not_valid")

    def test_similar_events_invalid_slug_is_empty(self, event_service):
        """A malformed slug yields no similar events instead of an error."""
        assert event_service.similar_events("not_valid") == []
        assert event_service.similar_events(None) == []

    def test_similar_events(self, event_service, event_data, image_factory):
        """Events sharing a tag are returned."""
        event_service.create_event(event_data, image_factory(), "a.png")
        other = event_service.create_event({**event_data, "title": "PyData"}, image_factory(), "b.png")
        similar = event_service.similar_events("python-meetup-berlin")
        assert [e.id for e in similar] == [other.id]


@pytest.fixture
def booking_service() -> BookingService:
    return BookingService(DjangoBookingStore(), DjangoEventStore())


@pytest.fixture
def stored_event(db, event_data):
    return DjangoEventStore().create(EventDraft.from_input(event_data), "/media/a.png", "a.png")


@pytest.mark.django_db
class TestBookingService:
    """Tests for BookingService."""

    def test_create_booking_normalizes_email(self, booking_service, stored_event):
        """The stored email is trimmed and lower-cased."""
        booking = booking_service.create_booking(str(stored_event.id), stored_event.slug, " Ada@Example.com ")
        assert booking.email.value == "ada@example.com"
        assert booking_service.count_for_event(stored_event.id) == 1

    def test_second_booking_same_email(self, booking_service, stored_event):
        """Booking twice with the same email (any case) is ALREADY_BOOKED."""
        booking_service.create_booking(str(stored_event.id), stored_event.slug, "ada@example.com")
        outcome = booking_service.book(str(stored_event.id), stored_event.slug, "ADA@example.com")
        assert not outcome.success
        assert isinstance(outcome.error, AlreadyBookedError)
        assert outcome.error.message == "You have already booked this event"

    def test_unknown_event(self, booking_service):
        """A well-formed id with no event is EVENT_REFERENCE_MISSING."""
        with pytest.raises(EventReferenceError) as excinfo:
            booking_service.create_booking(str(uuid.uuid4()), "ghost", "ada@example.com")
        assert excinfo.value.status == 404

    @pytest.mark.parametrize(
        ("event_id", "slug", "email", "field"),
        [
            ("not-a-uuid", "x", "ada@example.com", "eventId"),
            (None, "x", "ada@example.com", "eventId"),
            (str(uuid.uuid4()), "  ", "ada@example.com", "slug"),
            (str(uuid.uuid4()), "x", "ada@", "email"),
            (str(uuid.uuid4()), "x", None, "email"),
        ],
    )
    def test_invalid_input(self, booking_service, event_id, slug, email, field):
        """Malformed input is VALIDATION_ERROR naming the field."""
        outcome = booking_service.book(event_id, slug, email)
        assert not outcome.success
        assert outcome.error.code is ErrorCode.VALIDATION_ERROR
        assert outcome.error.details == {"field": field}
