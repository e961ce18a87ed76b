from __future__ import annotations

from pydantic import BaseModel, Field


class RestaurantOut(BaseModel):
    id: str
    name: str
    address: str
    cuisine: str
    rating: float | None = Field(default=None, ge=0.0, le=5.0)
    price: str
    price_level: int = Field(..., ge=1, le=4)
    distance: float = Field(..., ge=0.0, description="Miles from the searched location")
    latitude: float
    longitude: float
    hours: str | None = None


class RestaurantsResponse(BaseModel):
    restaurants: list[RestaurantOut]


class ErrorResponse(BaseModel):
    error: str
