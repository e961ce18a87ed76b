import pytest

from restaurant_finder.restaurants.config import RankingConfig
from restaurant_finder.restaurants.geocoding import (
    Coordinates,
    GeocodingError,
    LocationNotFoundError,
    _load_gazetteer,
    geocode,
    normalize_address,
)

SAN_FRANCISCO = Coordinates(37.7749, -122.4194)


def test_normalize_address():
    assert normalize_address("  San   FRANCISCO ") == "san francisco"


def test_geocode_city_name_is_case_insensitive():
    assert geocode("San Francisco") == SAN_FRANCISCO
    assert geocode("  san  francisco") == SAN_FRANCISCO


def test_geocode_uses_first_address_component():
    assert geocode("San Francisco, CA") == SAN_FRANCISCO


def test_geocode_postal_code():
    assert geocode("94102") == Coordinates(37.7793, -122.4193)
    assert geocode("Somewhere St, CA 94110-1234") == Coordinates(37.7487, -122.4158)


def test_geocode_unknown_location():
    with pytest.raises(LocationNotFoundError, match="Atlantis"):
        geocode("Atlantis")


def test_missing_gazetteer_is_geocoding_error(tmp_path):
    config = RankingConfig(locations_path=tmp_path / "missing.csv")
    with pytest.raises(GeocodingError):
        _load_gazetteer(config)
