"""Domain error taxonomy and the DRF exception handler.

Service layers raise subclasses of ``DomainError``.  Each kind carries
the HTTP status and machine-readable code used by
``api_exception_handler`` to build the error envelope::

    {"success": false,
     "error": {"code": "NOT_FOUND", "message": "...", "statusCode": 404}}

Anything that is not a known error kind is logged and re-raised so
Django produces a 500.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import PermissionDenied
from django.db import IntegrityError
from django.http import Http404
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response

logger = structlog.get_logger(__name__)


class DomainError(Exception):
    """Base class for business-rule violations surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"
    default_message: str = "Internal server error."

    def __init__(self, message: Optional[str] = None, details: Any = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class BadRequestError(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "BAD_REQUEST"
    default_message = "Bad request."


class UnauthorizedError(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"
    default_message = "Not authenticated."


class ForbiddenError(DomainError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"
    default_message = "Access denied."


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    default_message = "Resource not found."


class ConflictError(DomainError):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"
    default_message = "Resource already exists."


# ---------------------------------------------------------------------------
# DRF exception handler
# ---------------------------------------------------------------------------

_DRF_CODES = {
    status.HTTP_400_BAD_REQUEST: "VALIDATION_ERROR",
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_415_UNSUPPORTED_MEDIA_TYPE: "UNSUPPORTED_MEDIA_TYPE",
    status.HTTP_429_TOO_MANY_REQUESTS: "TOO_MANY_REQUESTS",
}


def error_payload(
    code: str, message: str, status_code: int, details: Any = None
) -> Dict[str, Any]:
    """Build the error envelope shared by every failed request."""
    error: Dict[str, Any] = {
        "code": code,
        "message": message,
        "statusCode": status_code,
    }
    if details:
        error["details"] = details
    return {"success": False, "error": error}


def _is_unique_violation(exc: IntegrityError) -> bool:
    text = str(exc).lower()
    return "unique" in text or "duplicate" in text


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """Translate known exceptions into the standard error envelope.

    Returns ``None`` for unknown exceptions so DRF re-raises them.
    """
    view = context.get("view")
    log = logger.bind(view=type(view).__name__ if view else None)

    if isinstance(exc, DomainError):
        log_method = log.warning if exc.status_code < 500 else log.error
        log_method("api.domain_error", code=exc.code, message=exc.message)
        return Response(
            error_payload(exc.code, exc.message, exc.status_code, exc.details),
            status=exc.status_code,
        )

    if isinstance(exc, Http404):
        exc = drf_exceptions.NotFound()
    elif isinstance(exc, PermissionDenied):
        exc = drf_exceptions.PermissionDenied()

    if isinstance(exc, IntegrityError):
        if _is_unique_violation(exc):
            log.warning("api.integrity_conflict", error=str(exc))
            return Response(
                error_payload(
                    "CONFLICT",
                    "Resource already exists.",
                    status.HTTP_409_CONFLICT,
                ),
                status=status.HTTP_409_CONFLICT,
            )
        log.warning("api.integrity_error", error=str(exc))
        return Response(
            error_payload(
                "BAD_REQUEST",
                "Invalid reference in the database.",
                status.HTTP_400_BAD_REQUEST,
            ),
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, drf_exceptions.APIException):
        status_code = exc.status_code
        code = _DRF_CODES.get(status_code, "ERROR")
        if isinstance(exc, drf_exceptions.ValidationError):
            message = "Validation failed."
            details = exc.detail
        else:
            message = str(exc.detail)
            details = None

        headers: Dict[str, str] = {}
        auth_header = getattr(exc, "auth_header", None)
        if auth_header:
            headers["WWW-Authenticate"] = auth_header
        wait = getattr(exc, "wait", None)
        if wait:
            headers["Retry-After"] = str(int(wait))

        log.info("api.request_rejected", code=code, status_code=status_code)
        return Response(
            error_payload(code, message, status_code, details),
            status=status_code,
            headers=headers or None,
        )

    log.error("api.unhandled_exception", error_type=type(exc).__name__)
    return None
