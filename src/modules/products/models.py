"""Catalog entry (Product) model.

Business rules implemented:
- Name is unique among all entries, compared case-insensitively.  The
  ``products_name_ci_unique`` functional constraint is the store-level
  guarantee; ``CatalogService`` pre-checks only when creating.
- Price must be greater than zero.
- ``version`` is the optimistic-concurrency counter.  It starts at 0 and
  every successful update bumps it by exactly one (see
  ``ProductDjangoRepository.update_if_version``).
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models.functions import Lower

from modules.core.models import BaseModel


class Product(BaseModel):
    """Catalog entry with a mutable price and an optimistic version."""

    name = models.CharField(max_length=255)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    version = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                Lower("name"),
                name="products_name_ci_unique",
            ),
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
        ]

    def save(self, *args, **kwargs) -> None:
        if self.name:
            self.name = self.name.strip()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.name} (v{self.version})"
