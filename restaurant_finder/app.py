from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .restaurants.cache import get_result_cache
from .restaurants.geocoding import GeocodingError, LocationNotFoundError, geocode
from .restaurants.models import ErrorResponse, RestaurantsResponse
from .restaurants.ranking import find_nearby
from .search.models import SortBy, SortOrder

logger = logging.getLogger(__name__)

app = FastAPI(title="Restaurant Finder API", version="1.0.0")

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


# ── Error rendering ──────────────────────────────────────────────────────


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    message = f"Invalid query parameter: {', '.join(fields)}" if fields else "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get(
    "/api/restaurants",
    response_model=RestaurantsResponse,
    responses=_ERROR_RESPONSES,
)
def restaurants(
    address: str = Query(""),
    sort_by: SortBy = Query(..., alias="sortBy"),
    sort_order: SortOrder = Query(..., alias="sortOrder"),
) -> RestaurantsResponse:
    if not address.strip():
        raise HTTPException(status_code=400, detail="Address is required")

    try:
        origin = geocode(address)
    except LocationNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except GeocodingError as exc:
        logger.warning("Geocoding failed for %r", address, exc_info=True)
        raise HTTPException(status_code=500, detail="Geocoding failed") from exc

    return RestaurantsResponse(restaurants=find_nearby(origin, sort_by, sort_order))


@app.get("/api/cache/stats")
def cache_stats() -> dict:
    return get_result_cache().stats()
