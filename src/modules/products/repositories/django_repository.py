"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising, and the Service Layer decides how to translate a
missing entity.  The one exception is a violation of the case-insensitive
name constraint, which is surfaced as ``ProductAlreadyExists`` because
only the store can detect it reliably under concurrent writers.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from modules.products.exceptions import ProductAlreadyExists
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

NAME_CONSTRAINT = "products_name_ci_unique"


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_name(self, name: str) -> Optional[Product]:
        return Product.objects.filter(name__iexact=name.strip()).first()

    def list(self) -> List[Product]:
        return list(Product.objects.order_by("name"))

    def save(self, entity: Product) -> Product:
        """Insert a new product (or persist an already loaded one)."""
        try:
            with transaction.atomic():
                entity.save()
        except IntegrityError as exc:
            _raise_if_duplicate_name(exc, entity.name)
            raise
        return entity

    def update_if_version(
        self,
        id: str,
        expected_version: int,
        *,
        name: str,
        price: Decimal,
    ) -> Optional[Product]:
        try:
            with transaction.atomic():
                updated = Product.objects.filter(
                    id=id, version=expected_version
                ).update(
                    name=name,
                    price=price,
                    version=F("version") + 1,
                    updated_at=timezone.now(),
                )
        except IntegrityError as exc:
            _raise_if_duplicate_name(exc, name)
            raise

        if not updated:
            return None

        return Product.objects.get(id=id)


def _raise_if_duplicate_name(exc: IntegrityError, name: str) -> None:
    if NAME_CONSTRAINT in str(exc):
        raise ProductAlreadyExists(
            f"Product with name '{name}' already exists."
        ) from exc
