"""Monetary helpers.

All amounts are ``Decimal`` with two fractional digits.  Rounding is
always ``ROUND_HALF_UP`` so that e.g. ``0.125`` becomes ``0.13``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

Numeric = Union[Decimal, int, str]


def to_decimal(value: Numeric) -> Decimal:
    """Coerce *value* into a ``Decimal`` without going through ``float``."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        raise TypeError("Monetary values must not be floats.")
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Invalid monetary value: {value!r}") from exc


def quantize(value: Numeric) -> Decimal:
    """Round to cents, half-up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def percentage_of(amount: Numeric, rate: Numeric) -> Decimal:
    """Return ``amount * rate`` rounded to cents, half-up."""
    return quantize(to_decimal(amount) * to_decimal(rate))
