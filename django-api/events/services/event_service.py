"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from typing import Any, BinaryIO

from events.domain import Event, EventDraft, EventOrder, Slug
from events.domain.errors import (
    DomainError,
    DuplicateEventError,
    EventNotFoundError,
    InvalidSlugError,
    MissingImageError,
    MissingSlugError,
)
from events.services.uploads import ImageUploadCoordinator
from events.stores.interfaces import EventStore

logger = logging.getLogger(__name__)


def parse_slug(raw: str | None) -> Slug:
    """Normalize a slug route parameter.

    Raises:
        MissingSlugError: If the parameter is absent or blank.
        InvalidSlugError: If it is badly encoded, malformed or too long.
    """
    if raw is None or not raw.strip():
        raise MissingSlugError()
    try:
        return Slug.from_route(raw)
    except UnicodeDecodeError:
        raise InvalidSlugError("Invalid slug encoding") from None
    except ValueError as exc:
        raise InvalidSlugError(str(exc)) from exc


class EventService:
    """Service for event catalog operations."""

    def __init__(self, store: EventStore, uploads: ImageUploadCoordinator) -> None:
        self._store = store
        self._uploads = uploads

    def list_events(self, order: EventOrder = EventOrder.NEWEST) -> list[Event]:
        """Return all events."""
        return self._store.list_events(order)

    def get_event(self, slug: str | None) -> Event:
        """Return an event by slug.

        Raises:
            MissingSlugError: If no slug was given.
            InvalidSlugError: If the slug is malformed.
            EventNotFoundError: If the event does not exist.
        """
        parsed = parse_slug(slug)
        event = self._store.get_by_slug(parsed)
        if event is None:
            raise EventNotFoundError(parsed.value)
        return event

    def similar_events(self, slug: str | None) -> list[Event]:
        """Return events sharing a tag with the event at ``slug``.

        An unknown or malformed slug yields an empty list.
        """
        try:
            parsed = parse_slug(slug)
        except DomainError:
            return []
        return self._store.similar_to(parsed)

    def create_event(
        self, data: dict[str, Any], image: BinaryIO | None, filename: str = ""
    ) -> Event:
        """Validate, check for duplicates, upload the image and store the event.

        The image is uploaded only after validation and the duplicate check
        pass. If storing the record fails, the upload is rolled back before
        the store error propagates.

        Raises:
            MissingImageError: If no image was provided.
            EventValidationError: If a field is missing or malformed.
            DuplicateEventError: If the same title, date, time and venue exist.
            UploadError: If the image upload fails.
            StoreError: If the store rejects the record.
        """
        if image is None:
            raise MissingImageError()

        draft = EventDraft.from_input(data)

        existing = self._store.find_duplicate(draft.title, draft.date, draft.time, draft.venue)
        if existing is not None:
            logger.info("Rejected duplicate of event %s (%s)", existing.id, existing.slug)
            raise DuplicateEventError(str(existing.id), existing.slug)

        blob = self._uploads.upload(image, filename)
        try:
            event = self._store.create(draft, blob.url, blob.asset_id)
        except BaseException:
            self._uploads.rollback(blob.asset_id)
            raise

        logger.info("Created event %s (%s)", event.id, event.slug)
        return event
