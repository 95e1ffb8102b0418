"""Catalog domain exceptions.

Raised by the Service Layer when business rules are violated.
The API boundary (``modules.core.error_handler``) translates them
into structured error responses by their kind.
"""

from __future__ import annotations

from modules.core.exceptions import ConflictError, NotFoundError


class ProductAlreadyExists(ConflictError):
    """A product with the same name (case-insensitive) already exists."""


class ProductNotFound(NotFoundError):
    """The requested product does not exist in the catalog."""


class StaleProductVersion(ConflictError):
    """The product was modified by another writer since it was last read.

    The write was not applied.  Callers must re-read the product and
    retry with the current version.
    """
