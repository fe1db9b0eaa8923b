"""Domain error codes for the events module."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Domain error codes."""

    MISSING_SLUG = "MISSING_SLUG"
    INVALID_SLUG = "INVALID_SLUG"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_IMAGE = "MISSING_IMAGE"
    DUPLICATE_EVENT = "DUPLICATE_EVENT"
    DUPLICATE_KEY = "DUPLICATE_KEY"
    UPLOAD_ERROR = "UPLOAD_ERROR"
    CAST_ERROR = "CAST_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    ALREADY_BOOKED = "ALREADY_BOOKED"
    EVENT_REFERENCE_MISSING = "EVENT_REFERENCE_MISSING"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"


ERROR_STATUS: dict[ErrorCode, int] = {
    ErrorCode.MISSING_SLUG: 400,
    ErrorCode.INVALID_SLUG: 400,
    ErrorCode.EVENT_NOT_FOUND: 404,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.MISSING_IMAGE: 400,
    ErrorCode.DUPLICATE_EVENT: 409,
    ErrorCode.DUPLICATE_KEY: 409,
    ErrorCode.UPLOAD_ERROR: 502,
    ErrorCode.CAST_ERROR: 400,
    ErrorCode.INTERNAL_SERVER_ERROR: 500,
    ErrorCode.ALREADY_BOOKED: 409,
    ErrorCode.EVENT_REFERENCE_MISSING: 404,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.METHOD_NOT_ALLOWED: 405,
    ErrorCode.UNSUPPORTED_MEDIA_TYPE: 415,
}


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    @property
    def status(self) -> int:
        return ERROR_STATUS[self.code]


class EventNotFoundError(DomainError):
    """Raised when no event matches a slug."""

    def __init__(self, slug: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message=f"Event not found for slug: {slug}",
        )
        self.slug = slug


class MissingSlugError(DomainError):
    """Raised when the slug route parameter is absent or blank."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.MISSING_SLUG,
            message="Missing required route parameter: slug",
        )


class InvalidSlugError(DomainError):
    """Raised when a slug fails the public slug format."""

    def __init__(self, message: str = "Invalid slug format. Use lowercase letters, numbers, and hyphens only.") -> None:
        super().__init__(code=ErrorCode.INVALID_SLUG, message=message)


class EventValidationError(DomainError):
    """Raised when event or booking input breaks a field rule."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            details=details,
        )


class MissingImageError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.MISSING_IMAGE,
            message="Image file is required",
        )


class DuplicateEventError(DomainError):
    """Raised by the preflight check when the same event is already listed."""

    FIELDS = ("title", "date", "time", "venue")

    def __init__(self, existing_id: str, existing_slug: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_EVENT,
            message="An event with the same title, date, time, and venue already exists",
            details={
                "fields": list(self.FIELDS),
                "existing": {"id": existing_id, "slug": existing_slug},
            },
        )


class UploadError(DomainError):
    """Raised when the blob store rejects or fails an image transfer."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            code=ErrorCode.UPLOAD_ERROR,
            message="Image upload failed",
            details={"error": reason},
        )


class StoreError(DomainError):
    """A store-layer failure translated into the stable taxonomy.

    Carries DUPLICATE_KEY, VALIDATION_ERROR or CAST_ERROR codes produced by
    the store error normalizer.
    """


class AlreadyBookedError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_BOOKED,
            message="You have already booked this event",
        )


class EventReferenceError(DomainError):
    """Raised when a booking points at an event that does not exist."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_REFERENCE_MISSING,
            message="Referenced event does not exist",
        )
        self.event_id = event_id
