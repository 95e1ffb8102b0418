"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class UpsertProductDTO(BaseModel):
    """Immutable DTO for product create-or-update requests.

    Without ``id`` the request creates a new entry.  With ``id`` it
    updates that entry and ``version`` must carry the version the caller
    last read.

    Validates:
    - ``name`` is a non-blank string (surrounding whitespace stripped).
    - ``price`` is a Decimal greater than zero.
    - ``version`` is present whenever ``id`` is.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[UUID] = None
    name: str
    price: Decimal
    version: Optional[int] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name must not be blank.")
        return v.strip()

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v

    @field_validator("version")
    @classmethod
    def version_must_be_non_negative(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError("Version cannot be negative.")
        return v

    @model_validator(mode="after")
    def update_requires_version(self):
        if self.id is not None and self.version is None:
            raise ValueError("Version is required when updating a product.")
        return self

    @property
    def is_new(self) -> bool:
        return self.id is None
