"""Pytest configuration and shared fixtures."""

import uuid
from datetime import datetime, timezone

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from events.domain import Event, EventDraft, EventId, EventOrder, EventRef, Slug
from events.domain.slugs import base_slug, next_slug
from events.services.event_service import EventService
from events.services.uploads import ImageUploadCoordinator
from events.stores.interfaces import BlobStore, EventStore, StoredBlob

# 1x1 transparent PNG
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06"
    b"\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f\x00\x00\x01\x01"
    b"\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / "media"
    return settings.MEDIA_ROOT


@pytest.fixture
def event_data() -> dict:
    return {
        "title": "Python Meetup Berlin",
        "description": "Monthly meetup for Python developers.",
        "overview": "An evening of talks, demos and conversation about Python.",
        "venue": "Factory Hall",
        "location": "Berlin, Germany",
        "date": "2026-05-15",
        "time": "09:30",
        "mode": "offline",
        "audience": "Developers",
        "organizer": "Berlin Python Usergroup",
        "agenda": ["Welcome", "Lightning talks", "Networking"],
        "tags": ["python", "community"],
    }


def make_image(name: str = "cover.png", content_type: str = "image/png") -> SimpleUploadedFile:
    return SimpleUploadedFile(name, PNG_BYTES, content_type=content_type)


@pytest.fixture
def image() -> SimpleUploadedFile:
    return make_image()


@pytest.fixture
def image_factory():
    return make_image


class InMemoryEventStore(EventStore):
    """Event store keeping events in a dict; can be told to fail on create."""

    def __init__(self, journal: list) -> None:
        self.events: dict[uuid.UUID, Event] = {}
        self.journal = journal
        self.create_error: Exception | None = None

    def list_events(self, order=EventOrder.NEWEST):
        events = list(self.events.values())
        if order is EventOrder.UPCOMING:
            return sorted(events, key=lambda e: (e.date.value, e.time.value))
        return sorted(events, key=lambda e: e.created_at, reverse=True)

    def get_by_slug(self, slug: Slug):
        return next((e for e in self.events.values() if e.slug == slug.value), None)

    def find_duplicate(self, title, date, time, venue):
        self.journal.append(("find_duplicate", title))
        for event in self.events.values():
            if (event.title, event.date, event.time, event.venue) == (title, date, time, venue):
                return EventRef(id=event.id, slug=event.slug)
        return None

    def create(self, draft: EventDraft, image_url: str, image_asset: str) -> Event:
        self.journal.append(("create", image_asset))
        if self.create_error is not None:
            raise self.create_error
        base = base_slug(draft.title)
        now = datetime.now(timezone.utc)
        event = Event(
            id=EventId(uuid.uuid4()),
            title=draft.title,
            slug=next_slug(base, [e.slug for e in self.events.values()]),
            description=draft.description,
            overview=draft.overview,
            image=image_url,
            venue=draft.venue,
            location=draft.location,
            date=draft.date,
            time=draft.time,
            mode=draft.mode,
            audience=draft.audience,
            agenda=draft.agenda,
            organizer=draft.organizer,
            tags=draft.tags,
            created_at=now,
            updated_at=now,
        )
        self.events[event.id.value] = event
        return event

    def similar_to(self, slug: Slug):
        source = self.get_by_slug(slug)
        if source is None:
            return []
        return [
            e for e in self.events.values()
            if e.id != source.id and set(e.tags) & set(source.tags)
        ]

    def event_exists(self, event_id: EventId) -> bool:
        return event_id.value in self.events


class RecordingBlobStore(BlobStore):
    """Blob store that records uploads and deletes in a shared journal."""

    def __init__(self, journal: list) -> None:
        self.journal = journal
        self.blobs: dict[str, bytes] = {}
        self.upload_error: Exception | None = None
        self.delete_error: Exception | None = None

    def upload(self, content, filename, namespace):
        self.journal.append(("upload", filename))
        if self.upload_error is not None:
            raise self.upload_error
        asset_id = f"{namespace}/{len(self.blobs) + 1}-{filename}"
        self.blobs[asset_id] = content.read()
        return StoredBlob(url=f"https://blobs.test/{asset_id}", asset_id=asset_id)

    def delete(self, asset_id):
        self.journal.append(("delete", asset_id))
        if self.delete_error is not None:
            raise self.delete_error
        self.blobs.pop(asset_id, None)


@pytest.fixture
def journal() -> list:
    return []


@pytest.fixture
def memory_store(journal) -> InMemoryEventStore:
    return InMemoryEventStore(journal)


@pytest.fixture
def blob_store(journal) -> RecordingBlobStore:
    return RecordingBlobStore(journal)


@pytest.fixture
def event_service(memory_store, blob_store) -> EventService:
    return EventService(memory_store, ImageUploadCoordinator(blob_store))
