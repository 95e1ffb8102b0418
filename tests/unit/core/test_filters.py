"""Unit tests for the stable ordering filter backend."""

from __future__ import annotations

import pytest
from rest_framework.request import Request
from rest_framework.test import APIRequestFactory

from modules.core.filters import StableOrderingFilter
from modules.orders.models import Order

pytestmark = pytest.mark.unit


class _View:
    ordering_fields = ["order_date", "customer_name", "total", "id"]
    ordering = ["-order_date", "-id"]


def _ordering(query: dict) -> list:
    request = Request(APIRequestFactory().get("/", query))
    return StableOrderingFilter().get_ordering(request, Order.objects.all(), _View())


class TestStableOrderingFilter:
    def test_client_ordering_gets_id_tie_breaker(self):
        assert _ordering({"ordering": "total"}) == ["total", "-id"]

    def test_multiple_fields_keep_their_order(self):
        assert _ordering({"ordering": "-customer_name,total"}) == [
            "-customer_name",
            "total",
            "-id",
        ]

    def test_explicit_id_is_not_duplicated(self):
        assert _ordering({"ordering": "total,id"}) == ["total", "id"]

    def test_default_ordering_unchanged(self):
        assert _ordering({}) == ["-order_date", "-id"]

    def test_unknown_fields_fall_back_to_default(self):
        assert _ordering({"ordering": "secret"}) == ["-order_date", "-id"]
