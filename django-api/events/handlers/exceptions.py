"""DRF exception handler mapping domain errors to HTTP responses."""

import logging
from typing import Any

from django.http import JsonResponse
from rest_framework import exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

from events.domain.errors import DomainError, ErrorCode

logger = logging.getLogger(__name__)

# Codes for errors rendered by DRF itself, by status.
STATUS_CODES = {
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
    415: ErrorCode.UNSUPPORTED_MEDIA_TYPE,
}

# Detail keys promoted to the top level of the response body.
TOP_LEVEL_DETAILS = ("fields", "keyValue", "existing")


def error_body(error: DomainError) -> dict[str, Any]:
    body: dict[str, Any] = {"message": error.message, "code": error.code.value}
    details = dict(error.details)
    for key in TOP_LEVEL_DETAILS:
        if key in details:
            body[key] = details.pop(key)
    if details:
        body["details"] = details
    return body


def framework_error_body(response: Response) -> dict[str, Any]:
    """Reshape a DRF default error response (parse errors, 404, 405...) as ``{message, code}``."""
    data = response.data
    detail = data.get("detail") if isinstance(data, dict) else data
    code = STATUS_CODES.get(response.status_code)
    if code is None:
        if response.status_code >= 500:
            code = ErrorCode.INTERNAL_SERVER_ERROR
        else:
            code = ErrorCode.VALIDATION_ERROR
    return {"message": str(detail or response.status_text), "code": code.value}


def domain_exception_handler(exc: Exception, context: dict[str, Any]) -> Response:
    """Render every failure as ``{message, code, ...}``."""
    if isinstance(exc, DomainError):
        set_rollback()
        return Response(error_body(exc), status=exc.status)

    if isinstance(exc, exceptions.ValidationError):
        set_rollback()
        return Response(
            {
                "message": "Validation failed",
                "code": ErrorCode.VALIDATION_ERROR.value,
                "details": exc.detail,
            },
            status=400,
        )

    response = exception_handler(exc, context)
    if response is not None:
        response.data = framework_error_body(response)
        return response

    view = context.get("view")
    logger.exception("Unhandled error in %s", type(view).__name__ if view else "request")
    set_rollback()
    return Response(
        {
            "message": "Internal server error",
            "code": ErrorCode.INTERNAL_SERVER_ERROR.value,
            "details": {"error": str(exc) or type(exc).__name__},
        },
        status=500,
    )


def json_not_found(request, exception) -> JsonResponse:
    """Django ``handler404`` for URLs that match no route."""
    return JsonResponse(
        {"message": "Not found", "code": ErrorCode.NOT_FOUND.value},
        status=404,
    )
