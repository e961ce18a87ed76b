from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from ..search.models import SortBy, SortOrder
from .config import DEFAULT_RANKING_CONFIG
from .geocoding import Coordinates
from .models import RestaurantOut


@dataclass(frozen=True)
class RankingKey:
    """Everything that determines one ranked result list."""

    origin: Coordinates
    sort_by: SortBy
    sort_order: SortOrder
    radius_miles: float
    limit: int


class RankedResultCache:
    """
    In-memory cache of ranked restaurant lists with a fixed time-to-live.

    Expired entries are dropped when read and swept whenever a new list is
    stored, so the cache never holds more than the lists written within the
    last ``ttl`` seconds.
    """

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[RankingKey, tuple[float, list[RestaurantOut]]] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: RankingKey) -> list[RestaurantOut] | None:
        entry = self._entries.get(key)
        if entry is not None and self._clock() - entry[0] < self.ttl:
            self.hits += 1
            return list(entry[1])
        if entry is not None:
            del self._entries[key]
        self.misses += 1
        return None

    def put(self, key: RankingKey, results: list[RestaurantOut]) -> None:
        now = self._clock()
        self._evict_expired(now)
        self._entries[key] = (now, list(results))

    def stats(self) -> dict:
        lookups = self.hits + self.misses
        return {
            "size": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(self.hits / lookups * 100, 1) if lookups else 0.0,
        }

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def _evict_expired(self, now: float) -> None:
        expired = [k for k, (stored_at, _) in self._entries.items() if now - stored_at >= self.ttl]
        for key in expired:
            del self._entries[key]


_result_cache: RankedResultCache | None = None


def get_result_cache() -> RankedResultCache:
    """Return the process-wide ranked result cache, creating it on first call."""
    global _result_cache
    if _result_cache is None:
        _result_cache = RankedResultCache(ttl=DEFAULT_RANKING_CONFIG.cache_ttl)
    return _result_cache
