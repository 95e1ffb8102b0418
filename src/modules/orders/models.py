"""Order and OrderLine models.

Business rules implemented:
- ``order_date`` is set once on insert and never changes.
- ``subtotal``, ``vat`` and ``total`` are computed once at creation
  (see ``modules.orders.pricing``) and never recalculated.
- Status moves ``CREATED`` -> ``CANCELLED`` only (enforced at service
  layer); a cancelled order always carries a ``cancellation_date`` that
  is not earlier than its ``order_date``.
- OrderLine snapshots the catalog name and price at creation time
  (``product_name``, ``unit_price``).  Lines reference the catalog by
  value, not by foreign key, so later catalog changes never reach them.
"""

from __future__ import annotations

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import UUIDModel
from modules.orders.constants import (
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    OrderStatus,
)


class Order(UUIDModel):
    """Order aggregate root: an order together with its owned lines."""

    order_date = models.DateTimeField(auto_now_add=True, db_index=True)
    customer_name = models.CharField(max_length=255)
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    vat = models.DecimalField(max_digits=12, decimal_places=2)
    total = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.CREATED,
    )
    cancellation_date = models.DateTimeField(null=True, blank=True, db_index=True)

    class Meta:
        db_table = "sales_orders"
        ordering = ["-order_date", "-id"]
        indexes = [
            models.Index(fields=["status"], name="sales_orders_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(
                        status=OrderStatus.CREATED,
                        cancellation_date__isnull=True,
                    )
                    | models.Q(
                        status=OrderStatus.CANCELLED,
                        cancellation_date__isnull=False,
                    )
                ),
                name="orders_cancellation_date_matches_status",
            ),
            models.CheckConstraint(
                condition=(
                    models.Q(cancellation_date__isnull=True)
                    | models.Q(cancellation_date__gte=models.F("order_date"))
                ),
                name="orders_cancelled_after_created",
            ),
        ]

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        """Return ``True`` if the order is in a terminal state."""
        return self.status in TERMINAL_STATES

    def can_transition_to(self, new_status: str) -> bool:
        """Check whether transitioning to *new_status* is valid."""
        return new_status in VALID_TRANSITIONS.get(self.status, set())

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"Order {self.id} for {self.customer_name} ({self.status})"


class OrderLine(UUIDModel):
    """Line item owned by exactly one Order.

    ``unit_price`` is a **snapshot** of the catalog price at the moment
    the order was created; it is never re-read from the catalog.
    """

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="items",
    )
    position = models.PositiveSmallIntegerField()
    product_name = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        db_table = "order_lines"
        ordering = ["position"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_lines_quantity_positive",
            ),
            models.UniqueConstraint(
                fields=["order", "position"],
                name="order_lines_unique_position",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.product_name} x{self.quantity} @ {self.unit_price}"
