"""Filter predicate composition for order listings.

``build_order_filter`` is a pure function: it only builds a ``Q``
object and never touches the database, so it can be tested without a
store.  Each supplied bound narrows its date field inclusively; omitted
bounds add no constraint, and the pieces are combined with AND.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from django.db.models import Q

from modules.orders.exceptions import InvalidDateRange


def date_range_filter(
    field: str,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> Q:
    """Return ``start <= field <= end`` for whichever bounds are given."""
    if start is not None and end is not None:
        if start > end:
            raise InvalidDateRange(
                f"Invalid {field} range: start {start.isoformat()} "
                f"is after end {end.isoformat()}."
            )
        return Q(**{f"{field}__range": (start, end)})
    if start is not None:
        return Q(**{f"{field}__gte": start})
    if end is not None:
        return Q(**{f"{field}__lte": end})
    return Q()


def build_order_filter(
    created_start: Optional[datetime] = None,
    created_end: Optional[datetime] = None,
    cancelled_start: Optional[datetime] = None,
    cancelled_end: Optional[datetime] = None,
) -> Q:
    """Compose the listing predicate over ``order_date`` and ``cancellation_date``.

    Raises:
        InvalidDateRange: a range's start is after its end.
    """
    return date_range_filter("order_date", created_start, created_end) & date_range_filter(
        "cancellation_date", cancelled_start, cancelled_end
    )
