"""Composition root: wires repositories, the catalog cache and services.

This is the only module that knows about every concrete implementation.
Views and management commands ask it for ready-made services; every
other module depends only on the abstractions.
"""

from __future__ import annotations

from django.conf import settings

from modules.core.cache import DjangoCatalogCache
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import CatalogService


def build_catalog_service() -> CatalogService:
    return CatalogService(
        repository=ProductDjangoRepository(),
        cache=DjangoCatalogCache(alias=settings.CATALOG_CACHE_ALIAS),
    )


def build_order_service() -> OrderService:
    return OrderService(
        order_repository=OrderDjangoRepository(),
        catalog_service=build_catalog_service(),
        vat_rate=settings.VAT_RATE,
    )
