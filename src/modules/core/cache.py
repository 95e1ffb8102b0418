"""Read-through cache for catalog listings.

The cache exposes exactly two operations, both invoked explicitly by
``CatalogService``:

- ``get_or_load``: return the cached listing, or call *loader* on a miss
  and store its result.
- ``invalidate_all``: drop every cached listing.

Listings are stored under a key that embeds the current *generation*.
``get_or_load`` reads the generation before running the loader, and
``invalidate_all`` bumps it.  A reader whose load raced with a write
therefore stores its result under a generation nobody reads any more,
so a stale listing can never be resurrected after invalidation.

Entries never expire on their own; a successful catalog write is the
only invalidation trigger.  Because the backing store is the shared
Django cache (Redis in deployments), every process observes the same
generation.
"""

from __future__ import annotations

import time
from typing import Callable, Generic, List, Protocol, TypeVar

import structlog
from django.core.cache import caches

logger = structlog.get_logger(__name__)

T = TypeVar("T")

CATALOG_CACHE_KEY = "catalog:products:all"


class ICatalogCache(Protocol[T]):
    """Cache contract used by the catalog service."""

    def get_or_load(self, loader: Callable[[], List[T]]) -> List[T]: ...

    def invalidate_all(self) -> None: ...


class DjangoCatalogCache(Generic[T]):
    """``ICatalogCache`` backed by a configured Django cache alias."""

    def __init__(self, alias: str = "default", key: str = CATALOG_CACHE_KEY) -> None:
        self._alias = alias
        self._key = key
        self._generation_key = f"{key}:generation"

    @property
    def _backend(self):
        return caches[self._alias]

    def _listing_key(self, generation: int) -> str:
        return f"{self._key}:g{generation}"

    def _seed_generation(self) -> None:
        # Seeded from the clock so a lost counter never reuses an old generation.
        self._backend.add(self._generation_key, time.time_ns(), timeout=None)

    def current_generation(self) -> int:
        self._seed_generation()
        generation = self._backend.get(self._generation_key)
        if generation is None:
            self._seed_generation()
            generation = self._backend.get(self._generation_key)
        return int(generation)

    def get_or_load(self, loader: Callable[[], List[T]]) -> List[T]:
        generation = self.current_generation()
        key = self._listing_key(generation)

        cached = self._backend.get(key)
        if cached is not None:
            logger.debug("catalog.cache_hit", key=key, size=len(cached))
            return cached

        entries = list(loader())
        self._backend.set(key, entries, timeout=None)
        logger.info("catalog.cache_miss", key=key, size=len(entries))
        return entries

    def invalidate_all(self) -> None:
        self._seed_generation()
        try:
            generation = self._backend.incr(self._generation_key)
        except ValueError:
            # Counter evicted between seed and increment.
            self._seed_generation()
            generation = self.current_generation()
        self._backend.delete(self._listing_key(generation - 1))
        logger.info("catalog.cache_invalidated", generation=generation)
