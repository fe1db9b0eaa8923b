"""Serializers for transforming domain models to API responses and parsing input."""

import json

from django.conf import settings
from rest_framework import serializers
from rest_framework.fields import empty
from rest_framework.utils import html


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.CharField()
    title = serializers.CharField()
    slug = serializers.CharField()
    description = serializers.CharField()
    overview = serializers.CharField()
    image = serializers.CharField()
    venue = serializers.CharField()
    location = serializers.CharField()
    date = serializers.CharField()
    time = serializers.CharField()
    mode = serializers.CharField()
    audience = serializers.CharField()
    agenda = serializers.ListField(child=serializers.CharField())
    organizer = serializers.CharField()
    tags = serializers.ListField(child=serializers.CharField())
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")


class BookingSerializer(serializers.Serializer):
    """Serializer for Booking domain model."""

    id = serializers.CharField()
    eventId = serializers.CharField(source="event_id")
    email = serializers.CharField()
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")


class StringListField(serializers.Field):
    """A list of strings sent as repeated form fields, a JSON array or delimited text.

    Always produces a list; blank items are dropped.
    """

    default_error_messages = {
        "invalid": "Expected a list of strings.",
        "invalid_json": "Expected a JSON array of strings.",
    }

    def __init__(self, separator: str, **kwargs) -> None:
        self.separator = separator
        kwargs.setdefault("required", False)
        kwargs.setdefault("default", list)
        super().__init__(**kwargs)

    def get_value(self, dictionary):
        if html.is_html_input(dictionary):
            values = dictionary.getlist(self.field_name)
            return values if values else empty
        return dictionary.get(self.field_name, empty)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = [data]
        if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
            self.fail("invalid")
        if len(data) == 1:
            data = self._split(data[0])
        return [item.strip() for item in data if item.strip()]

    def _split(self, text: str) -> list[str]:
        text = text.strip()
        if text.startswith("[") and text.endswith("]"):
            try:
                parsed = json.loads(text)
            except ValueError:
                self.fail("invalid_json")
            if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
                self.fail("invalid_json")
            return parsed
        return text.split(self.separator)

    def to_representation(self, value):
        return list(value)


class CreateEventSerializer(serializers.Serializer):
    """Input shape of POST /api/events.

    Presence and format rules live in the domain (EventDraft); this layer
    only parses form encodings and enforces length limits.
    """

    title = serializers.CharField(required=False, allow_blank=True, max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, max_length=500)
    overview = serializers.CharField(required=False, allow_blank=True, max_length=5000)
    venue = serializers.CharField(required=False, allow_blank=True, max_length=200)
    location = serializers.CharField(required=False, allow_blank=True, max_length=200)
    date = serializers.CharField(required=False, allow_blank=True, max_length=40)
    time = serializers.CharField(required=False, allow_blank=True, max_length=20)
    mode = serializers.CharField(required=False, allow_blank=True, max_length=50)
    audience = serializers.CharField(required=False, allow_blank=True, max_length=200)
    organizer = serializers.CharField(required=False, allow_blank=True, max_length=200)
    agenda = StringListField(separator="\n")
    tags = StringListField(separator=",")
    image = serializers.FileField(required=False)

    def validate_image(self, image):
        content_type = getattr(image, "content_type", "") or ""
        if not content_type.startswith("image/"):
            raise serializers.ValidationError("Upload must be an image file.")
        if image.size > settings.MAX_UPLOAD_SIZE_BYTES:
            max_mb = settings.MAX_UPLOAD_SIZE_BYTES // (1024 * 1024)
            raise serializers.ValidationError(f"Image exceeds maximum size of {max_mb} MB.")
        return image
