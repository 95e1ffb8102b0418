"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
Creation is wrapped in ``transaction.atomic()`` so the Order aggregate
(Order + OrderLines) is persisted as one unit.

Reads use ``prefetch_related("items")``: one query for the orders and
one batched query for all of their lines, whatever the page size.
State transitions lock the order row with ``select_for_update()``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Q, QuerySet

from modules.orders.models import Order, OrderLine
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        order = Order.objects.create(
            customer_name=data["customer_name"],
            subtotal=data["subtotal"],
            vat=data["vat"],
            total=data["total"],
        )
        lines = data["lines"]
        OrderLine.objects.bulk_create(
            [
                OrderLine(
                    order=order,
                    position=position,
                    product_name=line["product_name"],
                    quantity=line["quantity"],
                    unit_price=line["unit_price"],
                )
                for position, line in enumerate(lines)
            ]
        )

        logger.info("order.persisted", order_id=str(order.id), line_count=len(lines))
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def _base_queryset(self) -> QuerySet[Order]:
        return Order.objects.prefetch_related("items")

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with its lines.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return self._base_queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE).

        Must be called inside a transaction.  Returns ``None`` for
        non-existent or invalid IDs.
        """
        try:
            return self._base_queryset().select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(
        self,
        predicate: Optional[Q] = None,
        ordering: Optional[Sequence[str]] = None,
    ) -> QuerySet[Order]:
        queryset = self._base_queryset()
        if predicate is not None:
            queryset = queryset.filter(predicate)
        if ordering:
            queryset = queryset.order_by(*ordering)
        return queryset

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist header changes of an existing order.

        Lines are never rewritten after creation.
        """
        entity.save()
        logger.info("order.saved", order_id=str(entity.id), status=entity.status)
        return entity
