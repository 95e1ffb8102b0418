"""Order service layer (Use Cases).

Orchestrates order creation, cancellation and retrieval.

Business rules enforced:
- Every line's unit price is a snapshot of the catalog price at the
  moment of lookup; later catalog changes never reach the order.
- All catalog lookups succeed before anything is written.  An unknown
  product aborts creation with ``ProductNotFound`` and no partial order.
- ``subtotal``/``vat``/``total`` are computed once, at creation.
- ``CREATED`` -> ``CANCELLED`` is the only transition; cancelling twice
  raises ``OrderAlreadyCancelled``.

Creation follows a read-then-single-write pattern: the catalog reads are
plain snapshot reads taken *before* the write transaction opens, and the
order plus its lines are then persisted in one atomic unit.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Dict, Optional, Sequence

import structlog
from django.db import transaction
from django.utils import timezone

from modules.orders.constants import OrderStatus
from modules.orders.exceptions import InvalidOrder, OrderAlreadyCancelled, OrderNotFound
from modules.orders.pricing import DEFAULT_VAT_RATE, calculate_totals
from modules.orders.queries import build_order_filter

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.orders.dtos import CreateOrderDTO, ListOrdersQueryDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.models import Product
    from modules.products.services import CatalogService

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives its repository and the catalog service via constructor
    injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        catalog_service: CatalogService,
        vat_rate: Decimal = DEFAULT_VAT_RATE,
    ) -> None:
        self._order_repo = order_repository
        self._catalog = catalog_service
        self._vat_rate = vat_rate

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Create an order with price snapshots from the catalog.

        Steps:
        1. Re-check the request shape (blank customer, no lines,
           non-positive quantity).
        2. Resolve every line against the catalog (case-insensitive),
           capturing the current name and price.  Repeated products are
           looked up once so their lines share one snapshot.
        3. Compute subtotal, VAT and total.
        4. Persist order + lines atomically, then return the hydrated
           aggregate.

        Raises:
            InvalidOrder: malformed request.
            ProductNotFound: a product name is not in the catalog.
        """
        self._validate(dto)
        log = logger.bind(customer_name=dto.customer_name, line_count=len(dto.items))
        log.info("order.creation_started")

        snapshots: Dict[str, Product] = {}
        lines = []
        for item in dto.items:
            key = item.product_name.casefold()
            if key not in snapshots:
                snapshots[key] = self._catalog.find_by_name(item.product_name)
            product = snapshots[key]
            lines.append(
                {
                    "product_name": product.name,
                    "quantity": item.quantity,
                    "unit_price": product.price,
                }
            )

        totals = calculate_totals(
            ((line["unit_price"], line["quantity"]) for line in lines),
            self._vat_rate,
        )

        order = self._order_repo.create(
            {
                "customer_name": dto.customer_name,
                "lines": lines,
                "subtotal": totals.subtotal,
                "vat": totals.vat,
                "total": totals.total,
            }
        )
        log.info(
            "order.created",
            order_id=str(order.id),
            subtotal=str(totals.subtotal),
            vat=str(totals.vat),
            total=str(totals.total),
        )

        return self._order_repo.get_by_id(str(order.id)) or order

    @transaction.atomic
    def cancel_order(self, order_id: str) -> Order:
        """Cancel a ``CREATED`` order.

        Locks the order row first so concurrent cancellations serialise;
        the later one sees ``CANCELLED`` and is rejected.

        Raises:
            OrderNotFound: order does not exist.
            OrderAlreadyCancelled: order is already cancelled.
        """
        order = self._order_repo.get_for_update(str(order_id))
        if not order:
            raise OrderNotFound(f"Order not found with id: {order_id}")

        log = logger.bind(order_id=str(order_id), current_status=order.status)

        if not order.can_transition_to(OrderStatus.CANCELLED):
            log.warning("order.cancel_not_allowed")
            raise OrderAlreadyCancelled(f"Order {order_id} is already cancelled.")

        order.status = OrderStatus.CANCELLED
        order.cancellation_date = max(timezone.now(), order.order_date)
        self._order_repo.save(order)

        log.info("order.cancelled", cancellation_date=order.cancellation_date.isoformat())
        return order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order with its lines.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(str(order_id))
        if not order:
            raise OrderNotFound(f"Order not found with id: {order_id}")
        return order

    def list_orders(
        self,
        query: Optional[ListOrdersQueryDTO] = None,
        ordering: Optional[Sequence[str]] = None,
    ) -> QuerySet[Order]:
        """Return a lazy, filtered listing with lines prefetched.

        Pagination is applied by the caller by slicing the result, which
        the store turns into LIMIT/OFFSET.

        Raises:
            InvalidDateRange: a range's start is after its end.
        """
        predicate = None
        if query is not None:
            predicate = build_order_filter(
                created_start=query.created_start,
                created_end=query.created_end,
                cancelled_start=query.cancelled_start,
                cancelled_end=query.cancelled_end,
            )
        return self._order_repo.list(predicate, ordering)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(dto: CreateOrderDTO) -> None:
        if not dto.customer_name or not dto.customer_name.strip():
            raise InvalidOrder("Customer name cannot be blank.")
        if not dto.items:
            raise InvalidOrder("Order must contain at least one item.")
        for item in dto.items:
            if not item.product_name or not item.product_name.strip():
                raise InvalidOrder("Product name cannot be blank.")
            if item.quantity < 1:
                raise InvalidOrder(
                    f"Quantity for '{item.product_name}' must be a positive number."
                )
