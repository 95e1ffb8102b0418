"""Unit tests for the API exception handler.

Covers:
- Domain errors mapped by kind (400/404/409) with the uniform body.
- Pydantic validation errors mapped to 400 with field details.
- DRF exceptions reshaped, keeping their status code.
- Unknown exceptions left to Django (handler returns ``None``).
"""

from __future__ import annotations

from http import HTTPStatus

import pytest
from pydantic import BaseModel, ValidationError as PydanticValidationError
from rest_framework import exceptions as drf_exceptions

from modules.core.error_handler import api_exception_handler, build_error_body
from modules.core.exceptions import ConflictError, NotFoundError, ValidationError
from modules.orders.exceptions import OrderAlreadyCancelled
from modules.products.exceptions import StaleProductVersion

pytestmark = pytest.mark.unit

BODY_KEYS = {"timestamp", "status", "error", "message"}


class _PriceModel(BaseModel):
    price: int


class TestBuildErrorBody:
    def test_shape(self):
        body = build_error_body(409, "Already cancelled.")
        assert set(body) == BODY_KEYS
        assert body["status"] == 409
        assert body["error"] == "Conflict"
        assert body["message"] == "Already cancelled."

    def test_details_included_when_given(self):
        body = build_error_body(400, "Invalid request data.", {"name": ["required"]})
        assert body["details"] == {"name": ["required"]}
        assert body["error"] == "Bad Request"


class TestDomainErrors:
    @pytest.mark.parametrize(
        "exc, expected_status",
        [
            (ValidationError("bad input"), 400),
            (NotFoundError("missing"), 404),
            (ConflictError("clash"), 409),
            (OrderAlreadyCancelled("Order x is already cancelled."), 409),
            (StaleProductVersion("stale"), 409),
        ],
    )
    def test_status_by_kind(self, exc, expected_status):
        response = api_exception_handler(exc, {})
        assert response.status_code == expected_status
        assert response.data["status"] == expected_status
        assert response.data["message"] == exc.message
        assert response.data["error"] == HTTPStatus(expected_status).phrase
        assert set(response.data) == BODY_KEYS

    def test_message_defaults_to_docstring(self):
        exc = OrderAlreadyCancelled()
        assert exc.message.startswith("The order is already cancelled")


class TestPydanticErrors:
    def test_mapped_to_400_with_field_details(self):
        with pytest.raises(PydanticValidationError) as excinfo:
            _PriceModel(price="not-a-number")

        response = api_exception_handler(excinfo.value, {})

        assert response.status_code == 400
        assert response.data["message"] == "Invalid request data."
        assert response.data["details"][0]["field"] == "price"


class TestDrfErrors:
    def test_not_authenticated_keeps_401(self):
        response = api_exception_handler(drf_exceptions.NotAuthenticated(), {})
        assert response.status_code == 401
        assert response.data["error"] == "Unauthorized"
        assert "credentials" in response.data["message"]
        assert "details" not in response.data

    def test_serializer_errors_carried_as_details(self):
        exc = drf_exceptions.ValidationError({"name": ["This field is required."]})
        response = api_exception_handler(exc, {})
        assert response.status_code == 400
        assert response.data["message"] == "Invalid request data."
        assert response.data["details"]["name"] == ["This field is required."]

    def test_unknown_exception_is_not_handled(self):
        assert api_exception_handler(RuntimeError("boom"), {}) is None
