from __future__ import annotations

import logging
import re
from dataclasses import dataclass

import pandas as pd

from .config import DEFAULT_RANKING_CONFIG, RankingConfig

logger = logging.getLogger(__name__)

_POSTAL_CODE = re.compile(r"\b(\d{5})(?:-\d{4})?\b")


class GeocodingError(Exception):
    """The geocoder could not run."""


class LocationNotFoundError(GeocodingError):
    """The address did not match any known location."""


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


_gazetteer: dict[str, Coordinates] | None = None


def normalize_address(address: str) -> str:
    return " ".join(address.strip().lower().split())


def _load_gazetteer(config: RankingConfig) -> dict[str, Coordinates]:
    try:
        df = pd.read_csv(config.locations_path, dtype={"query": str})
    except (OSError, pd.errors.ParserError) as exc:
        logger.warning("Could not load gazetteer from %s", config.locations_path, exc_info=True)
        raise GeocodingError(str(exc)) from exc

    return {
        normalize_address(row.query): Coordinates(float(row.latitude), float(row.longitude))
        for row in df.itertuples(index=False)
    }


def get_gazetteer(config: RankingConfig = DEFAULT_RANKING_CONFIG) -> dict[str, Coordinates]:
    global _gazetteer
    if _gazetteer is None:
        _gazetteer = _load_gazetteer(config)
    return _gazetteer


def geocode(address: str) -> Coordinates:
    """
    Resolve a free-form address or postal code to coordinates.

    Tries the whole normalised address, then its first comma-separated part
    ("San Francisco, CA" -> "san francisco"), then any 5-digit postal code.
    """
    gazetteer = get_gazetteer()
    normalized = normalize_address(address)

    candidates = [normalized, normalized.split(",")[0].strip()]
    candidates.extend(_POSTAL_CODE.findall(normalized))

    for key in candidates:
        if key and key in gazetteer:
            return gazetteer[key]

    raise LocationNotFoundError(f"Could not find location: {address.strip()}")
