from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

import pytest

from features.common.exceptions.tide_exceptions import NoResults
from features.locations.models.location_types import Location
from features.locations.services.location_store import LocationStore
from features.locations.services.preference_storage import PreferenceStorage

VENICE_BEACH = Location(
    id="33.985,-118.4695",
    name="Venice Beach",
    latitude=33.985,
    longitude=-118.4695
)
VENICE_ITALY = Location(
    id="45.4371908,12.3345898",
    name="Venezia",
    latitude=45.4371908,
    longitude=12.3345898
)

class FakeGeocoder:
    """In-memory stand-in for the geocoding service."""

    def __init__(
        self,
        results: Optional[Dict[str, List[Location]]] = None,
        places: Optional[Dict[Tuple[float, float], Location]] = None,
        error: Optional[Exception] = None
    ):
        self.results = results or {}
        self.places = places or {}
        self.error = error
        self.forward_calls: List[str] = []
        self.reverse_calls: List[Tuple[float, float]] = []

    async def forward_geocode(self, text: str) -> List[Location]:
        self.forward_calls.append(text)
        if self.error:
            raise self.error
        locations = self.results.get(text, [])
        if not locations:
            raise NoResults(f"No locations found for '{text}'")
        return list(locations)

    async def reverse_geocode(self, latitude: float, longitude: float) -> Optional[Location]:
        self.reverse_calls.append((latitude, longitude))
        if self.error:
            raise self.error
        return self.places.get((latitude, longitude))

@pytest.fixture
def now() -> datetime:
    return datetime(2024, 12, 20, 12, 0, tzinfo=timezone.utc)

@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder(
        results={"venice": [VENICE_ITALY, VENICE_BEACH]},
        places={(33.985, -118.4695): VENICE_BEACH}
    )

@pytest.fixture
def store(geocoder: FakeGeocoder) -> LocationStore:
    return LocationStore(geocoder=geocoder)

@pytest.fixture
def preferences(tmp_path) -> PreferenceStorage:
    return PreferenceStorage(str(tmp_path / "prefs" / "preferences.json"))
