# backend/crm_core/common/api/exceptions.py

from __future__ import annotations

import logging
import uuid
from typing import Any

from django.db import InterfaceError, OperationalError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, NotAuthenticated, PermissionDenied, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


def ensure_request_id(request) -> str:
    """
    Ensures request has a stable request_id attribute and returns it.
    Safe to call from middleware and DRF exception handler.
    """
    rid = getattr(request, "request_id", None) if request is not None else None
    if not rid:
        rid = uuid.uuid4().hex
        if request is not None:
            setattr(request, "request_id", rid)
    return rid


def build_error_envelope(*, request=None, code: str, message: str, details: Any = None) -> dict[str, Any]:
    """
    Canonical error envelope for the enquiry API.
    Reusable from Django views (JsonResponse) and DRF (Response).
    """
    rid = ensure_request_id(request)
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details,
            "request_id": rid,
        }
    }


# -------------------------------------------------------------------
# Domain error taxonomy
# ValidationError is DRF's own (400); the rest are defined here so
# services can raise them and the global handler renders them.
# -------------------------------------------------------------------

class NotFoundError(APIException):
    """
    Referenced id does not resolve to a stored record.
    """
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"


class AuthorizationError(PermissionDenied):
    """
    Actor lacks the required role, or targets themselves in a privileged operation.
    """
    default_detail = "Admin access required"
    default_code = "authorization_error"


class ConflictError(APIException):
    """
    409 Conflict that still flows through the global exception handler.
    Use when a natural key is already taken (duplicate payment, exhausted id allocation).
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"

    def __init__(self, detail=None, code=None):
        super().__init__(detail=detail or self.default_detail, code=code or self.default_code)


class StoreUnavailable(APIException):
    """
    The record store could not be reached. Distinct from "no data".
    """
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Record store unavailable."
    default_code = "store_unavailable"


def _code_for(exc: Exception, http_status: int) -> str:
    if isinstance(exc, ValidationError):
        return "validation_error"
    if isinstance(exc, NotAuthenticated):
        return "not_authenticated"
    if isinstance(exc, AuthorizationError):
        return "authorization_error"
    if isinstance(exc, PermissionDenied):
        return "permission_denied"
    if isinstance(exc, Http404):
        return "not_found"
    if isinstance(exc, APIException):
        return getattr(exc, "default_code", "api_error") or "api_error"
    if http_status >= 500:
        return "server_error"
    return "error"


def _first_error(value) -> str | None:
    if isinstance(value, dict):
        for v in value.values():
            found = _first_error(v)
            if found:
                return found
        return None
    if isinstance(value, (list, tuple)):
        return _first_error(value[0]) if value else None
    return str(value)


def _message_and_details(data) -> tuple[str, Any]:
    """
    {"detail": ...}          -> message=detail, details=the remaining keys (or None)
    {"field": ["msg"], ...}  -> message="field: msg" for the first field, details=data
    ["msg"]                  -> message="msg", details=None
    """
    if isinstance(data, dict) and "detail" in data:
        rest = {k: v for k, v in data.items() if k != "detail"}
        return str(data["detail"]), rest or None
    if isinstance(data, dict) and data:
        field = next(iter(data))
        first = _first_error(data[field])
        if first:
            label = "" if field == "non_field_errors" else f"{field}: "
            return f"{label}{first}", data
        return "Request failed.", data
    if isinstance(data, list) and len(data) == 1:
        return str(data[0]), None
    return "Request failed.", data


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    request = context.get("request")

    # Outages that slipped past store_guard still surface as 503, never as empty data.
    if isinstance(exc, (OperationalError, InterfaceError)):
        logger.error("Record store unavailable: %s", exc)
        exc = StoreUnavailable()

    response = drf_exception_handler(exc, context)

    # Truly unhandled error
    if response is None:
        logger.error("Unhandled %s in API view", type(exc).__name__, exc_info=exc)
        return Response(
            build_error_envelope(
                request=request,
                code="server_error",
                message="Unexpected server error.",
                details=None,
            ),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    http_status = response.status_code
    code = _code_for(exc, http_status)

    message, details = _message_and_details(response.data)

    return Response(
        build_error_envelope(
            request=request,
            code=code,
            message=message,
            details=details,
        ),
        status=http_status,
        headers=response.headers,
    )
