from __future__ import annotations

from pathlib import Path

import pandas as pd

from .config import DEFAULT_RANKING_CONFIG

_df: pd.DataFrame | None = None


def _load(path: Path) -> pd.DataFrame:
    df = pd.read_csv(path, dtype={"id": str})

    # Price tier as shown to users: 1 -> "$", 4 -> "$$$$"
    df["price"] = df["price_level"].apply(lambda n: "$" * int(n))

    # Lowercase name for case-insensitive sorting
    df["name_lower"] = df["name"].fillna("").str.lower()

    return df


def get_dataframe() -> pd.DataFrame:
    """Return the in-memory restaurant DataFrame, loading it on first call."""
    global _df
    if _df is None:
        _df = _load(DEFAULT_RANKING_CONFIG.restaurants_path)
    return _df
