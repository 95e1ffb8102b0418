"""Base repository contract shared by the catalog and order stores.

Services receive an ``IRepository`` subclass through their constructor
and never import Django ORM models' managers themselves; the concrete
ORM-backed classes are wired in ``config.bootstrap``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, Sequence, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Minimal persistence contract for one aggregate type ``T``."""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Return the aggregate with primary key *id*.

        Unknown or malformed ids yield ``None`` rather than an error.
        """

    @abstractmethod
    def list(self) -> Sequence[T]:
        """Return every aggregate in the store's default order."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Write *entity* and return it with store-assigned values filled in."""
