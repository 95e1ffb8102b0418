"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: input for a single order line.
- ``CreateOrderDTO``: input for order creation (nested items).
- ``ListOrdersQueryDTO``: optional date ranges for order listings.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single order line in a creation request.

    Only the product *name* and quantity are supplied.  The unit price
    is resolved by the Service Layer from the catalog.
    """

    model_config = ConfigDict(frozen=True)

    product_name: str
    quantity: int

    @field_validator("product_name")
    @classmethod
    def product_name_must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Product name cannot be blank.")
        return v.strip()

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be a positive number.")
        return v


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Validates:
    - ``customer_name`` is not blank.
    - ``items`` contains at least one line.
    - Each line quantity is positive.

    The same product may appear on several lines.
    """

    model_config = ConfigDict(frozen=True)

    customer_name: str
    items: List[CreateOrderItemDTO]

    @field_validator("customer_name")
    @classmethod
    def customer_name_must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Customer name cannot be blank.")
        return v.strip()

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must contain at least one item.")
        return v


class ListOrdersQueryDTO(BaseModel):
    """Optional date-range filters for order listings.

    Any bound may be omitted.  Range consistency (start <= end) is
    checked when the filter predicate is built.
    """

    model_config = ConfigDict(frozen=True)

    created_start: Optional[datetime] = None
    created_end: Optional[datetime] = None
    cancelled_start: Optional[datetime] = None
    cancelled_end: Optional[datetime] = None
