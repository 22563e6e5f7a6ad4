# backend/crm_core/tests/test_error_envelope.py
import pytest
from django.db import InterfaceError, OperationalError
from django.test import RequestFactory
from rest_framework.exceptions import ValidationError

from crm_core.common.api.exceptions import (
    ConflictError,
    NotFoundError,
    StoreUnavailable,
    api_exception_handler,
    build_error_envelope,
)
from crm_core.common.middleware import RequestIdMiddleware
from crm_core.common.store import store_guard


def _handle(exc):
    req = RequestFactory().get("/api/v1/enquiries/")
    return api_exception_handler(exc, {"request": req, "view": None})


def test_envelope_shape():
    req = RequestFactory().get("/")
    body = build_error_envelope(request=req, code="conflict", message="Taken", details={"a": 1})
    assert body == {
        "error": {
            "code": "conflict",
            "message": "Taken",
            "details": {"a": 1},
            "request_id": req.request_id,
        }
    }


@pytest.mark.parametrize(
    "exc, status, code",
    [
        (NotFoundError("Enquiry 5 not found."), 404, "not_found"),
        (ConflictError(), 409, "conflict"),
        (StoreUnavailable(), 503, "store_unavailable"),
        (ValidationError({"client_name": ["Required."]}), 400, "validation_error"),
        (OperationalError("connection refused"), 503, "store_unavailable"),
    ],
)
def test_handler_maps_domain_errors(exc, status, code):
    res = _handle(exc)
    assert res.status_code == status
    assert res.data["error"]["code"] == code
    assert res.data["error"]["request_id"]


def test_validation_details_are_kept():
    res = _handle(ValidationError({"client_name": ["Required."]}))
    assert res.data["error"]["message"] == "client_name: Required."
    assert res.data["error"]["details"] == {"client_name": ["Required."]}


def test_unexpected_error_is_500_envelope():
    res = _handle(KeyError("boom"))
    assert res.status_code == 500
    assert res.data["error"]["code"] == "server_error"


def test_store_guard_turns_outages_into_store_unavailable():
    @store_guard
    def down():
        raise InterfaceError("connection already closed")

    with pytest.raises(StoreUnavailable):
        down()

    @store_guard
    def fine():
        return []

    assert fine() == []


def test_request_id_middleware_echoes_client_id():
    mw = RequestIdMiddleware(get_response=lambda r: None)
    req = RequestFactory().get("/", HTTP_X_REQUEST_ID="abc-123")
    mw.process_request(req)
    assert req.request_id == "abc-123"

    from django.http import HttpResponse

    res = mw.process_response(req, HttpResponse())
    assert res["X-Request-Id"] == "abc-123"

    long_req = RequestFactory().get("/", HTTP_X_REQUEST_ID="x" * 200)
    mw.process_request(long_req)
    assert long_req.request_id != "x" * 200


@pytest.mark.django_db
def test_api_errors_carry_the_request_id_header(api_client):
    res = api_client.get("/api/v1/enquiries/999/", HTTP_X_REQUEST_ID="trace-1")
    assert res.status_code == 404
    assert res["X-Request-Id"] == "trace-1"
    assert res.json()["error"]["request_id"] == "trace-1"


@pytest.mark.django_db
def test_openapi_schema_renders(api_client):
    res = api_client.get("/api/schema/")
    assert res.status_code == 200


def test_non_field_errors_message_has_no_label():
    res = _handle(ValidationError({"non_field_errors": ["Dates overlap."]}))
    assert res.data["error"]["message"] == "Dates overlap."
