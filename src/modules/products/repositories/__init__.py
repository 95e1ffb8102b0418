"""Catalog persistence: the repository contract and its Django ORM backing."""

from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.repositories.interfaces import IProductRepository

__all__ = ["ProductDjangoRepository", "IProductRepository"]
