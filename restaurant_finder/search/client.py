from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from .config import DEFAULT_CLIENT_CONFIG, ClientConfig
from .models import Restaurant, RestaurantsPayload, SearchParams

logger = logging.getLogger(__name__)

RESTAURANTS_PATH = "/api/restaurants"

FETCH_FAILED_MESSAGE = "Failed to fetch restaurants"
MALFORMED_RESPONSE_MESSAGE = "Received an unexpected response from the restaurant service"


class SearchError(Exception):
    """A restaurant search failed; ``message`` is safe to show to the user."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return FETCH_FAILED_MESSAGE
    if isinstance(body, dict):
        message = body.get("error")
        if isinstance(message, str) and message:
            return message
    return FETCH_FAILED_MESSAGE


class RestaurantSearchClient:
    """Async client for the restaurant search endpoint."""

    def __init__(
        self,
        config: ClientConfig = DEFAULT_CLIENT_CONFIG,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=config.base_url, timeout=config.timeout,
        )

    async def search(self, params: SearchParams) -> list[Restaurant]:
        """
        Fetch restaurants near ``params.location`` in backend order.

        Raises ``SearchError`` for transport failures, non-2xx responses and
        malformed bodies alike.
        """
        try:
            response = await self._http.get(RESTAURANTS_PATH, params=params.to_query())
        except httpx.HTTPError as exc:
            logger.warning("Restaurant search request failed for %r", params.location, exc_info=True)
            raise SearchError(str(exc) or FETCH_FAILED_MESSAGE) from exc

        if not response.is_success:
            message = _error_message(response)
            logger.warning(
                "Restaurant search for %r returned HTTP %s: %s",
                params.location, response.status_code, message,
            )
            raise SearchError(message, status_code=response.status_code)

        try:
            payload = RestaurantsPayload.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.warning("Malformed restaurant payload for %r", params.location, exc_info=True)
            raise SearchError(MALFORMED_RESPONSE_MESSAGE, status_code=response.status_code) from exc

        return payload.restaurants

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()
