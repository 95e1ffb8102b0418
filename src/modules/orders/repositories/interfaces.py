"""Order repository interface.

Extends ``IRepository[Order]`` with the methods required by the Order
aggregate: atomic creation with lines, a locked read for state
transitions, and predicate-driven listing.

Every read returns orders with their lines already loaded.  Listings
load the lines of a whole page in one batched query, never one query
per order.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db.models import Q, QuerySet

    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderLine children.  Mutations
    must be atomic.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its lines atomically.

        ``data`` must include ``customer_name``, ``subtotal``, ``vat``,
        ``total`` and ``lines`` (list of dicts with ``product_name``,
        ``quantity``, ``unit_price``, in display order).
        """

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def list(
        self,
        predicate: Optional[Q] = None,
        ordering: Optional[Sequence[str]] = None,
    ) -> QuerySet[Order]:
        """Lazily list orders matching *predicate*, lines prefetched."""
