"""Store error normalizer.

Translates raw store and provider exceptions into the stable error taxonomy.
Recognizes unique-constraint violations (single and bulk), schema validation
failures and identifier cast failures; anything else maps to ``None`` and is
left to the caller's generic 500 handling.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError

from events.domain.errors import ERROR_STATUS, ErrorCode, StoreError

UNKNOWN_FIELD = "unique field"
DUPLICATE_CODES = {11000, 11001}
UNIQUE_VIOLATION_SQLSTATE = "23505"

_DUP_KEY = re.compile(r"dup key:\s*\{\s*([^}]+?)\s*\}", re.IGNORECASE)
_PG_KEY = re.compile(r"Key \((?P<fields>[^)]+)\)=\((?P<values>.*?)\) already exists")
_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed:\s*(?P<columns>.+)$", re.MULTILINE)

# Attribute spellings used by document-store drivers for duplicate-key payloads.
_ERROR_ATTRIBUTES = (
    ("keyValue", "keyValue"),
    ("key_value", "keyValue"),
    ("writeErrors", "writeErrors"),
    ("write_errors", "writeErrors"),
)


@dataclass(frozen=True)
class NormalizedError:
    http_status: int
    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_domain_error(self) -> StoreError:
        return StoreError(code=self.code, message=self.message, details=dict(self.details))


@dataclass(frozen=True)
class DuplicateKeyInfo:
    fields: list[str]
    key_value: dict[str, Any] | None = None


def _error_document(exc: BaseException) -> dict[str, Any]:
    """Collect the structured fields a store error may carry."""
    doc: dict[str, Any] = {}
    details = getattr(exc, "details", None)
    if isinstance(details, Mapping):
        doc.update(details)
    for attr, key in _ERROR_ATTRIBUTES:
        value = getattr(exc, attr, None)
        if value is not None:
            doc.setdefault(key, value)
    return doc


def _sqlstate(exc: BaseException) -> str | None:
    cause = exc.__cause__
    for source in (exc, cause):
        if source is None:
            continue
        state = getattr(source, "sqlstate", None) or getattr(source, "pgcode", None)
        if isinstance(state, str):
            return state
    return None


def _is_unique_violation(exc: BaseException) -> bool:
    code = getattr(exc, "code", None)
    if isinstance(code, int) and code in DUPLICATE_CODES:
        return True
    message = str(exc)
    if "E11000" in message.upper():
        return True
    if isinstance(exc, IntegrityError):
        if _sqlstate(exc) == UNIQUE_VIOLATION_SQLSTATE:
            return True
        return "UNIQUE constraint failed" in message or "duplicate key" in message
    return False


def extract_duplicate_fields(exc: BaseException) -> DuplicateKeyInfo:
    """Find which fields collided in a unique-constraint violation.

    Looks for an explicit key-value map first, then aggregates bulk write
    errors, then parses the message. Falls back to a placeholder field name.
    """
    doc = _error_document(exc)

    key_value = doc.get("keyValue")
    if isinstance(key_value, Mapping) and key_value:
        return DuplicateKeyInfo(fields=list(key_value), key_value=dict(key_value))

    write_errors = doc.get("writeErrors")
    if isinstance(write_errors, list) and write_errors:
        aggregate: dict[str, Any] = {}
        for write_error in write_errors:
            if not isinstance(write_error, Mapping):
                continue
            nested = write_error.get("err")
            source = nested if isinstance(nested, Mapping) else write_error
            item_key_value = source.get("keyValue")
            if isinstance(item_key_value, Mapping):
                aggregate.update(item_key_value)
        if aggregate:
            return DuplicateKeyInfo(fields=list(aggregate), key_value=aggregate)

    message = str(exc)

    match = _DUP_KEY.search(message)
    if match:
        fields = [part.split(":")[0].strip() for part in match.group(1).split(",")]
        fields = [name for name in fields if name]
        return DuplicateKeyInfo(fields=fields or [UNKNOWN_FIELD])

    match = _PG_KEY.search(message)
    if match:
        fields = [name.strip() for name in match.group("fields").split(",")]
        values = [value.strip() for value in match.group("values").split(",")]
        key_value = dict(zip(fields, values)) if len(values) == len(fields) else None
        return DuplicateKeyInfo(fields=fields, key_value=key_value)

    match = _SQLITE_UNIQUE.search(message)
    if match:
        columns = [column.strip() for column in match.group("columns").split(",")]
        return DuplicateKeyInfo(fields=[column.rsplit(".", 1)[-1] for column in columns])

    return DuplicateKeyInfo(fields=[UNKNOWN_FIELD])


def _validation_messages(exc: DjangoValidationError) -> tuple[list[str], dict[str, list[str]]]:
    if hasattr(exc, "error_dict"):
        by_field = {name: [str(message) for message in messages] for name, messages in exc.message_dict.items()}
        flat = [message for messages in by_field.values() for message in messages]
        return flat, by_field
    return [str(message) for message in exc.messages], {}


def _is_cast_failure(exc: BaseException) -> bool:
    if type(exc).__name__ == "CastError":
        return True
    if isinstance(exc, DjangoValidationError):
        return not hasattr(exc, "error_dict") and getattr(exc, "code", None) == "invalid"
    return isinstance(exc, ValueError) and "badly formed hexadecimal UUID string" in str(exc)


def normalize_store_error(exc: BaseException) -> NormalizedError | None:
    """Map a raw store or provider error to ``NormalizedError``, or ``None``."""
    if _is_unique_violation(exc):
        info = extract_duplicate_fields(exc)
        details: dict[str, Any] = {"fields": info.fields}
        if info.key_value is not None:
            details["keyValue"] = info.key_value
        return NormalizedError(
            http_status=ERROR_STATUS[ErrorCode.DUPLICATE_KEY],
            code=ErrorCode.DUPLICATE_KEY,
            message=f"Duplicate value for unique field(s): {', '.join(info.fields)}",
            details=details,
        )

    if _is_cast_failure(exc):
        details = {}
        params = getattr(exc, "params", None)
        if isinstance(params, Mapping) and "value" in params:
            details["value"] = str(params["value"])
        for name in ("path", "value"):
            value = getattr(exc, name, None)
            if value is not None:
                details.setdefault(name, str(value))
        message = exc.messages[0] if isinstance(exc, DjangoValidationError) else str(exc)
        return NormalizedError(
            http_status=ERROR_STATUS[ErrorCode.CAST_ERROR],
            code=ErrorCode.CAST_ERROR,
            message=message or "Invalid value provided",
            details=details,
        )

    if isinstance(exc, DjangoValidationError):
        errors, by_field = _validation_messages(exc)
        details = {"errors": errors}
        if by_field:
            details["fields"] = by_field
        return NormalizedError(
            http_status=ERROR_STATUS[ErrorCode.VALIDATION_ERROR],
            code=ErrorCode.VALIDATION_ERROR,
            message="Validation failed",
            details=details,
        )

    return None
