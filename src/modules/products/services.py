"""Catalog service layer (Use Cases).

Orchestrates the business logic for the Product catalog, delegating
persistence to the injected ``IProductRepository`` and listing reads to
the injected ``ICatalogCache``.

Business rules enforced here:
- A new entry's name must not match an existing one, ignoring case.
  Renames of existing entries are not pre-checked; the store's unique
  constraint remains the only guard on that path.
- Updates are conditioned on the caller's version (optimistic
  concurrency).  A mismatch raises ``StaleProductVersion`` and writes
  nothing; there is no automatic retry.
- Every successful write invalidates the whole listing cache once the
  transaction commits.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog
from django.db import transaction

from modules.products.exceptions import (
    ProductAlreadyExists,
    ProductNotFound,
    StaleProductVersion,
)
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.core.cache import ICatalogCache
    from modules.products.dtos import UpsertProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class CatalogService:
    """Application service for catalog use-cases.

    Receives its repository and cache via constructor injection (DIP).
    """

    def __init__(
        self,
        repository: IProductRepository,
        cache: ICatalogCache[Product],
    ) -> None:
        self._repo = repository
        self._cache = cache

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def upsert_product(self, dto: UpsertProductDTO) -> Product:
        """Create a new entry (no ``id``) or update an existing one.

        Raises:
            ProductAlreadyExists: name already taken (create only).
            ProductNotFound: ``id`` does not exist (update only).
            StaleProductVersion: stored version differs from ``dto.version``.
        """
        if dto.is_new:
            product = self._create(dto)
        else:
            product = self._update(dto)

        transaction.on_commit(self._cache.invalidate_all)
        return product

    def _create(self, dto: UpsertProductDTO) -> Product:
        log = logger.bind(name=dto.name)

        if self._repo.get_by_name(dto.name):
            log.warning("product.duplicate_name")
            raise ProductAlreadyExists(f"Product with name '{dto.name}' already exists.")

        product = self._repo.save(Product(name=dto.name, price=dto.price))
        log.info("product.created", product_id=str(product.id))
        return product

    def _update(self, dto: UpsertProductDTO) -> Product:
        log = logger.bind(product_id=str(dto.id), expected_version=dto.version)

        product = self._repo.update_if_version(
            str(dto.id),
            dto.version,
            name=dto.name,
            price=dto.price,
        )
        if product is None:
            current = self._repo.get_by_id(str(dto.id))
            if current is None:
                raise ProductNotFound(f"Product not found with id: {dto.id}")
            log.warning("product.version_conflict", current_version=current.version)
            raise StaleProductVersion(
                f"Product {dto.id} was modified concurrently "
                f"(expected version {dto.version}, found {current.version}). "
                "Re-read the product and retry."
            )

        log.info("product.updated", version=product.version)
        return product

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self) -> List[Product]:
        """Return the whole catalog, served from the cache when warm."""
        return self._cache.get_or_load(self._repo.list)

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by ID, bypassing the listing cache.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product not found with id: {id}")
        return product

    def find_by_name(self, name: str) -> Product:
        """Look up the current catalog entry for *name*, ignoring case.

        This is a plain snapshot read: no lock is taken, so a concurrent
        price change may or may not be visible.

        Raises:
            ProductNotFound: if no entry has that name.
        """
        product = self._repo.get_by_name(name)
        if not product:
            raise ProductNotFound(f"Product not found with name: {name}")
        return product
