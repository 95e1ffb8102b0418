"""DRF filter backends shared by the API modules."""

from __future__ import annotations

from rest_framework.filters import OrderingFilter


class StableOrderingFilter(OrderingFilter):
    """``OrderingFilter`` that always ends with a unique tie-breaker.

    Client orderings on non-unique columns (``total``, ``customer_name``)
    would otherwise let rows with equal keys move between pages.
    """

    tie_breaker = "-id"

    def get_ordering(self, request, queryset, view):
        ordering = super().get_ordering(request, queryset, view)
        if not ordering:
            return ordering
        fields = [field.lstrip("-") for field in ordering]
        if self.tie_breaker.lstrip("-") in fields:
            return ordering
        return [*ordering, self.tie_breaker]
