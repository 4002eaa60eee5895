import pytest

from features.common.utils.coordinates import (
    format_coordinates,
    is_valid_coordinate,
    make_location_id,
    parse_location_id
)
from features.locations.models.location_types import Location

@pytest.mark.parametrize("latitude, longitude, expected", [
    (-33.8688, 151.2093, "33.9°S 151.2°E"),
    (25.7907, -80.13, "25.8°N 80.1°W"),
    (0.0, 0.0, "0.0°N 0.0°E"),
])
def test_format_coordinates(latitude, longitude, expected):
    assert format_coordinates(latitude, longitude) == expected

def test_location_formats_its_coordinates():
    location = Location(id="honolulu", name="Honolulu, Hawaii", latitude=21.3069, longitude=-157.8583)

    assert location.formatted_coordinates == "21.3°N 157.9°W"
    assert location.has_valid_coordinates is True

@pytest.mark.parametrize("latitude, longitude, valid", [
    (90.0, 180.0, True),
    (-90.0, -180.0, True),
    (90.0001, 0.0, False),
    (0.0, -180.0001, False),
])
def test_is_valid_coordinate(latitude, longitude, valid):
    assert is_valid_coordinate(latitude, longitude) is valid

def test_composite_id_round_trip():
    location_id = make_location_id(-33.8688, 151.2093)

    assert location_id == "-33.8688,151.2093"
    assert parse_location_id(location_id) == (-33.8688, 151.2093)

def test_parse_accepts_integers_and_spaces():
    assert parse_location_id("10, -20") == (10.0, -20.0)

@pytest.mark.parametrize("location_id", [
    "",
    "sydney",
    "1.0",
    "1.0,2.0,3.0",
    "abc,2.0",
    "nan,2.0",
    "inf,2.0",
    "95.0,2.0",
    "1.0,200.0",
])
def test_parse_rejects_malformed_ids(location_id):
    assert parse_location_id(location_id) is None
