"""Order total computation.

    subtotal = sum(unit_price * quantity)     over the snapshot prices
    vat      = round(subtotal * rate, 2, half-up)
    total    = subtotal + vat
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Tuple

from modules.core.money import ZERO, Numeric, percentage_of, quantize, to_decimal

DEFAULT_VAT_RATE = Decimal("0.20")


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    vat: Decimal
    total: Decimal


def calculate_totals(
    lines: Iterable[Tuple[Numeric, int]],
    vat_rate: Numeric = DEFAULT_VAT_RATE,
) -> OrderTotals:
    """Compute totals from ``(unit_price, quantity)`` pairs."""
    subtotal = ZERO
    for unit_price, quantity in lines:
        subtotal += to_decimal(unit_price) * quantity
    subtotal = quantize(subtotal)
    vat = percentage_of(subtotal, vat_rate)
    return OrderTotals(subtotal=subtotal, vat=vat, total=subtotal + vat)
