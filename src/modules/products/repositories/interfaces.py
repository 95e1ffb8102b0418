"""Product repository interface.

Extends ``IRepository[Product]`` with the look-ups required by the
catalog rules: case-insensitive name lookup (duplicate detection and
order price snapshots) and the version-conditioned update used for
optimistic concurrency.
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Product]:
        """Retrieve a product by name, ignoring case."""

    @abstractmethod
    def update_if_version(
        self,
        id: str,
        expected_version: int,
        *,
        name: str,
        price: Decimal,
    ) -> Optional[Product]:
        """Apply *name*/*price* only if the stored version is *expected_version*.

        On success the stored version is incremented by one and the
        refreshed product is returned.  Returns ``None`` when no row
        matched (absent id or stale version); nothing is written then.
        """
