"""Unit tests for CatalogService.

Covers:
- upsert_product (create): happy path, case-insensitive duplicate name.
- upsert_product (update): version-conditioned write, stale version,
  unknown id, and the unchecked-rename path.
- Cache invalidation after a committed write (and not after a failure).
- list_products served through the cache; get_product bypasses it.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from modules.products.dtos import UpsertProductDTO
from modules.products.exceptions import (
    ProductAlreadyExists,
    ProductNotFound,
    StaleProductVersion,
)
from modules.products.models import Product
from modules.products.services import CatalogService

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    return MagicMock()


@pytest.fixture()
def mock_cache():
    return MagicMock()


@pytest.fixture()
def service(mock_repo, mock_cache):
    return CatalogService(repository=mock_repo, cache=mock_cache)


def _product(**overrides) -> Product:
    defaults = {"name": "Laptop", "price": Decimal("1200.00"), "version": 0}
    defaults.update(overrides)
    return Product(**defaults)


# ===========================================================================
# upsert_product: create
# ===========================================================================


class TestCreate:
    def test_success(self, service, mock_repo):
        mock_repo.get_by_name.return_value = None
        mock_repo.save.side_effect = lambda p: p

        product = service.upsert_product(
            UpsertProductDTO(name="Laptop", price=Decimal("1200.00"))
        )

        assert product.name == "Laptop"
        assert product.price == Decimal("1200.00")
        assert product.version == 0
        mock_repo.save.assert_called_once()
        mock_repo.update_if_version.assert_not_called()

    def test_duplicate_name_ignores_case(self, service, mock_repo):
        mock_repo.get_by_name.return_value = _product(name="Laptop")

        with pytest.raises(ProductAlreadyExists, match="LAPTOP"):
            service.upsert_product(
                UpsertProductDTO(name="LAPTOP", price=Decimal("10.00"))
            )

        mock_repo.get_by_name.assert_called_once_with("LAPTOP")
        mock_repo.save.assert_not_called()


# ===========================================================================
# upsert_product: update
# ===========================================================================


class TestUpdate:
    def test_success_returns_bumped_entry(self, service, mock_repo):
        pid = uuid4()
        mock_repo.update_if_version.return_value = _product(
            id=pid, price=Decimal("999.00"), version=4
        )

        product = service.upsert_product(
            UpsertProductDTO(id=pid, name="Laptop", price=Decimal("999.00"), version=3)
        )

        assert product.version == 4
        mock_repo.update_if_version.assert_called_once_with(
            str(pid), 3, name="Laptop", price=Decimal("999.00")
        )

    def test_rename_is_not_prechecked(self, service, mock_repo):
        # Only creation looks for a same-named entry; a rename relies on
        # the store's unique constraint alone.
        pid = uuid4()
        mock_repo.update_if_version.return_value = _product(id=pid, name="Phone")

        service.upsert_product(
            UpsertProductDTO(id=pid, name="Phone", price=Decimal("1.00"), version=0)
        )

        mock_repo.get_by_name.assert_not_called()

    def test_stale_version(self, service, mock_repo):
        pid = uuid4()
        mock_repo.update_if_version.return_value = None
        mock_repo.get_by_id.return_value = _product(id=pid, version=5)

        with pytest.raises(StaleProductVersion, match="expected version 3, found 5"):
            service.upsert_product(
                UpsertProductDTO(id=pid, name="Laptop", price=Decimal("1.00"), version=3)
            )

    def test_unknown_id(self, service, mock_repo):
        mock_repo.update_if_version.return_value = None
        mock_repo.get_by_id.return_value = None

        with pytest.raises(ProductNotFound):
            service.upsert_product(
                UpsertProductDTO(
                    id=uuid4(), name="Laptop", price=Decimal("1.00"), version=0
                )
            )


# ===========================================================================
# Cache invalidation
# ===========================================================================


class TestCacheInvalidation:
    def test_invalidated_after_commit(
        self, service, mock_repo, mock_cache, django_capture_on_commit_callbacks
    ):
        mock_repo.get_by_name.return_value = None
        mock_repo.save.side_effect = lambda p: p

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            service.upsert_product(UpsertProductDTO(name="Mouse", price=Decimal("5")))
            mock_cache.invalidate_all.assert_not_called()

        assert len(callbacks) == 1
        mock_cache.invalidate_all.assert_called_once_with()

    def test_update_invalidates(
        self, service, mock_repo, mock_cache, django_capture_on_commit_callbacks
    ):
        mock_repo.update_if_version.return_value = _product(version=1)

        with django_capture_on_commit_callbacks(execute=True):
            service.upsert_product(
                UpsertProductDTO(
                    id=uuid4(), name="Laptop", price=Decimal("1.00"), version=0
                )
            )

        mock_cache.invalidate_all.assert_called_once_with()

    def test_failed_write_does_not_invalidate(
        self, service, mock_repo, mock_cache, django_capture_on_commit_callbacks
    ):
        mock_repo.update_if_version.return_value = None
        mock_repo.get_by_id.return_value = _product(version=7)

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            with pytest.raises(StaleProductVersion):
                service.upsert_product(
                    UpsertProductDTO(
                        id=uuid4(), name="Laptop", price=Decimal("1.00"), version=0
                    )
                )

        assert callbacks == []
        mock_cache.invalidate_all.assert_not_called()


# ===========================================================================
# Queries
# ===========================================================================


class TestQueries:
    def test_list_goes_through_cache(self, service, mock_repo, mock_cache):
        cached = [_product()]
        mock_cache.get_or_load.return_value = cached

        assert service.list_products() is cached
        mock_cache.get_or_load.assert_called_once_with(mock_repo.list)
        mock_repo.list.assert_not_called()

    def test_get_product_bypasses_cache(self, service, mock_repo, mock_cache):
        product = _product()
        mock_repo.get_by_id.return_value = product

        assert service.get_product(str(product.id)) is product
        mock_cache.get_or_load.assert_not_called()

    def test_get_product_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None
        with pytest.raises(ProductNotFound, match="Product not found with id"):
            service.get_product(str(uuid4()))

    def test_find_by_name_not_found(self, service, mock_repo):
        mock_repo.get_by_name.return_value = None
        with pytest.raises(ProductNotFound, match="Product not found with name: Tablet"):
            service.find_by_name("Tablet")
