from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SortBy(str, Enum):
    distance = "distance"
    rating = "rating"
    price = "price"
    name = "name"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"

    def toggled(self) -> SortOrder:
        return SortOrder.desc if self is SortOrder.asc else SortOrder.asc


class SearchPhase(str, Enum):
    idle = "idle"
    loading = "loading"
    success = "success"
    failure = "failure"


class Restaurant(BaseModel):
    """A restaurant record as returned by the backend.

    Only ``id`` is interpreted; every other field is carried through as-is.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str = Field(..., min_length=1)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class RestaurantsPayload(BaseModel):
    """Successful body of ``GET /api/restaurants``."""

    restaurants: list[Restaurant]

    @model_validator(mode="after")
    def _unique_ids(self) -> RestaurantsPayload:
        ids = [r.id for r in self.restaurants]
        if len(ids) != len(set(ids)):
            raise ValueError("restaurant ids must be unique")
        return self


class SearchParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    location: str = Field(..., min_length=1)
    sort_by: SortBy = SortBy.distance
    sort_order: SortOrder = SortOrder.asc

    def to_query(self) -> dict[str, str]:
        return {
            "address": self.location,
            "sortBy": self.sort_by.value,
            "sortOrder": self.sort_order.value,
        }


class SearchState(BaseModel):
    """Snapshot of everything the search UI renders from.

    Snapshots are immutable; the orchestrator replaces the whole snapshot on
    every transition.
    """

    model_config = ConfigDict(frozen=True)

    results: tuple[Restaurant, ...] = ()
    is_loading: bool = False
    error: str | None = None
    has_searched: bool = False
    location: str = ""
    sort_by: SortBy = SortBy.distance
    sort_order: SortOrder = SortOrder.asc

    @property
    def phase(self) -> SearchPhase:
        if not self.has_searched:
            return SearchPhase.idle
        if self.is_loading:
            return SearchPhase.loading
        if self.error is not None:
            return SearchPhase.failure
        return SearchPhase.success
