from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class RankingConfig:
    search_radius_miles: float = float(os.getenv("SEARCH_RADIUS_MILES", "25"))
    max_results: int = 50
    cache_ttl: int = 300  # 5 minutes
    restaurants_path: Path = _DATA_DIR / "restaurants.csv"
    locations_path: Path = _DATA_DIR / "locations.csv"


DEFAULT_RANKING_CONFIG = RankingConfig()
