from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from modules.products.dtos import UpsertProductDTO

pytestmark = pytest.mark.unit


class TestUpsertProductDTO:
    def test_create_without_id(self):
        dto = UpsertProductDTO(name=" Laptop ", price=Decimal("1200.00"))
        assert dto.is_new
        assert dto.name == "Laptop"
        assert dto.version is None

    def test_update_with_id_and_version(self):
        dto = UpsertProductDTO(
            id=uuid4(), name="Laptop", price=Decimal("1.00"), version=0
        )
        assert not dto.is_new

    def test_update_requires_version(self):
        with pytest.raises(ValidationError, match="Version is required"):
            UpsertProductDTO(id=uuid4(), name="Laptop", price=Decimal("1.00"))

    @pytest.mark.parametrize("price", [Decimal("0"), Decimal("-5.00")])
    def test_price_must_be_positive(self, price):
        with pytest.raises(ValidationError, match="greater than zero"):
            UpsertProductDTO(name="Laptop", price=price)

    def test_blank_name(self):
        with pytest.raises(ValidationError, match="blank"):
            UpsertProductDTO(name="  ", price=Decimal("1.00"))

    def test_negative_version(self):
        with pytest.raises(ValidationError, match="negative"):
            UpsertProductDTO(
                id=uuid4(), name="Laptop", price=Decimal("1.00"), version=-1
            )

    def test_string_price_parsed_as_decimal(self):
        dto = UpsertProductDTO(name="Laptop", price="19.99")
        assert dto.price == Decimal("19.99")
