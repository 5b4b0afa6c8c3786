"""DRF exception handler rendering every failure in one envelope.

Responses look like::

    {"error": {"kind": "conflict", "message": "...", "details": {...}}}

Domain errors carry their own kind and status. DRF's built-in exceptions
are folded into the same shape so clients only ever parse one format.
"""

from __future__ import annotations

import logging
from typing import Any

from django.conf import settings  # type: ignore
from rest_framework import exceptions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler as drf_exception_handler  # type: ignore

from shared.domain.exceptions import DomainError, InternalError

logger = logging.getLogger(__name__)

STATUS_KINDS = {
    status.HTTP_400_BAD_REQUEST: "validation",
    status.HTTP_401_UNAUTHORIZED: "authentication",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_409_CONFLICT: "conflict",
    status.HTTP_415_UNSUPPORTED_MEDIA_TYPE: "unsupported_media_type",
    status.HTTP_429_TOO_MANY_REQUESTS: "throttled",
}


def _error_body(kind: str, message: str, details: Any = None) -> dict[str, Any]:
    error: dict[str, Any] = {"kind": kind, "message": message}
    if details:
        error["details"] = details
    return {"error": error}


def _message_from_detail(detail: Any) -> str:
    if isinstance(detail, dict) and "detail" in detail:
        return str(detail["detail"])
    if isinstance(detail, str):
        return detail
    return "Invalid input"


def domain_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    view = context.get("view")

    if isinstance(exc, DomainError):
        if exc.status_code >= 500:
            logger.error("Domain error in %s: %s", view.__class__.__name__, exc, exc_info=exc)
        return Response(
            _error_body(exc.kind, exc.message, exc.details),
            status=exc.status_code,
        )

    response = drf_exception_handler(exc, context)
    if response is not None:
        kind = STATUS_KINDS.get(response.status_code, "error")
        if isinstance(exc, exceptions.ValidationError):
            response.data = _error_body(kind, "Invalid input", exc.detail)
        else:
            response.data = _error_body(kind, _message_from_detail(response.data))
        return response

    if settings.DEBUG:
        return None

    logger.exception("Unhandled error in %s", view.__class__.__name__)
    error = InternalError()
    return Response({"error": error.to_dict()}, status=error.status_code)
