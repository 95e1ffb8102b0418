"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API boundary (``modules.core.error_handler``) translates them
into structured error responses by their kind.
"""

from __future__ import annotations

from modules.core.exceptions import ConflictError, NotFoundError, ValidationError


class InvalidOrder(ValidationError):
    """The order request is malformed (blank customer, no lines, bad quantity)."""


class InvalidDateRange(ValidationError):
    """A listing filter range starts after it ends."""


class OrderNotFound(NotFoundError):
    """The requested order does not exist."""


class OrderAlreadyCancelled(ConflictError):
    """The order is already cancelled; cancellation is not idempotent."""
