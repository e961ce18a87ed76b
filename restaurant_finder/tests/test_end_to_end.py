import httpx
import pytest

from restaurant_finder.app import app
from restaurant_finder.restaurants.cache import get_result_cache
from restaurant_finder.search.client import RestaurantSearchClient
from restaurant_finder.search.models import SearchPhase
from restaurant_finder.search.orchestrator import SearchOrchestrator
from restaurant_finder.search.view import build_view


def _orchestrator() -> SearchOrchestrator:
    get_result_cache().clear()
    http = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")
    return SearchOrchestrator(RestaurantSearchClient(http_client=http))


@pytest.mark.asyncio
async def test_search_then_sort_against_backend():
    orchestrator = _orchestrator()

    await orchestrator.submit_search("San Francisco")
    assert orchestrator.state.phase is SearchPhase.success
    assert len(orchestrator.state.results) > 0

    await orchestrator.change_sort_by("name")
    names = [r.name for r in orchestrator.state.results]
    assert names[0] == "Bella Vista Trattoria"

    await orchestrator.toggle_sort_order()
    names = [r.name for r in orchestrator.state.results]
    assert names[0] == "The Civic Diner"

    view = build_view(orchestrator.state)
    assert view.heading == f"Found {len(names)} restaurants near you"
    assert view.sort_controls.order_label == "Descending"

    await orchestrator.aclose()


@pytest.mark.asyncio
async def test_unknown_location_against_backend():
    orchestrator = _orchestrator()

    await orchestrator.submit_search("Atlantis")

    assert orchestrator.state.phase is SearchPhase.failure
    assert orchestrator.state.error == "Could not find location: Atlantis"
    assert build_view(orchestrator.state).error_message == "Could not find location: Atlantis"

    await orchestrator.aclose()


@pytest.mark.asyncio
async def test_location_without_restaurants_against_backend():
    orchestrator = _orchestrator()

    await orchestrator.submit_search("Chicago")

    assert orchestrator.state.phase is SearchPhase.success
    assert orchestrator.state.results == ()

    await orchestrator.aclose()
