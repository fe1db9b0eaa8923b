"""Service construction for the HTTP handlers.

Stores are bound to the database alias and storage backend named in
settings, and injected into the services.
"""

from django.conf import settings

from events.services.booking_service import BookingService
from events.services.event_service import EventService
from events.services.uploads import ImageUploadCoordinator
from events.stores.blob_store import StorageBlobStore
from events.stores.django_store import DjangoBookingStore, DjangoEventStore


def get_event_service() -> EventService:
    uploads = ImageUploadCoordinator(
        StorageBlobStore(alias=settings.EVENT_IMAGE_STORAGE),
        namespace=settings.EVENT_IMAGE_NAMESPACE,
    )
    return EventService(DjangoEventStore(using=settings.EVENTS_DB_ALIAS), uploads)


def get_booking_service() -> BookingService:
    return BookingService(
        DjangoBookingStore(using=settings.EVENTS_DB_ALIAS),
        DjangoEventStore(using=settings.EVENTS_DB_ALIAS),
    )
