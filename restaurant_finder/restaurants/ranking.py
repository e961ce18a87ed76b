from __future__ import annotations

import numpy as np
import pandas as pd

from ..search.models import SortBy, SortOrder
from .cache import RankedResultCache, RankingKey, get_result_cache
from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .data_store import get_dataframe
from .geocoding import Coordinates
from .models import RestaurantOut

EARTH_RADIUS_MILES = 3958.8

SORT_COLUMNS: dict[SortBy, str] = {
    SortBy.distance: "distance",
    SortBy.rating: "rating",
    SortBy.price: "price_level",
    SortBy.name: "name_lower",
}


def haversine_miles(
    origin: Coordinates,
    latitudes: np.ndarray,
    longitudes: np.ndarray,
) -> np.ndarray:
    """Great-circle distance in miles from ``origin`` to each point."""
    lat1 = np.radians(origin.latitude)
    lat2 = np.radians(latitudes)
    dlat = lat2 - lat1
    dlon = np.radians(longitudes) - np.radians(origin.longitude)
    a = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_MILES * np.arcsin(np.sqrt(a))


def _to_out(row: pd.Series) -> RestaurantOut:
    return RestaurantOut(
        id=str(row["id"]),
        name=row["name"],
        address=row["address"],
        cuisine=row["cuisine"],
        rating=float(row["rating"]) if pd.notna(row["rating"]) else None,
        price=row["price"],
        price_level=int(row["price_level"]),
        distance=float(row["distance"]),
        latitude=float(row["latitude"]),
        longitude=float(row["longitude"]),
        hours=row["hours"] if pd.notna(row["hours"]) else None,
    )


def find_nearby(
    origin: Coordinates,
    sort_by: SortBy = SortBy.distance,
    sort_order: SortOrder = SortOrder.asc,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
    cache: RankedResultCache | None = None,
) -> list[RestaurantOut]:
    """
    Return restaurants within the search radius of ``origin``, ordered by
    ``sort_by`` in ``sort_order``.

    Missing values sort last in either direction; ties fall back to distance
    and then id.
    """
    cache = cache if cache is not None else get_result_cache()
    cache_key = RankingKey(
        origin=origin,
        sort_by=sort_by,
        sort_order=sort_order,
        radius_miles=config.search_radius_miles,
        limit=config.max_results,
    )
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    df = get_dataframe()
    distances = haversine_miles(
        origin, df["latitude"].to_numpy(), df["longitude"].to_numpy(),
    )
    candidates = df.assign(distance=np.round(distances, 2))
    candidates = candidates.loc[candidates["distance"] <= config.search_radius_miles]

    key = SORT_COLUMNS[sort_by]
    by = [key] + [c for c in ("distance", "id") if c != key]
    ascending = [sort_order is SortOrder.asc] + [True] * (len(by) - 1)
    ranked = candidates.sort_values(
        by, ascending=ascending, kind="mergesort", na_position="last",
    ).head(config.max_results)

    results = [_to_out(row) for _, row in ranked.iterrows()]
    cache.put(cache_key, results)
    return results
