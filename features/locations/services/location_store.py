import logging
from typing import Callable, Dict, List, Optional

from features.common.exceptions.tide_exceptions import GeocodingFailure, LocationNotFound, NoResults
from features.common.utils.coordinates import parse_location_id
from features.locations.models.location_types import (
    Location,
    LocationStoreEvent,
    LocationStoreEventKind
)
from features.locations.services.geocoder import Geocoder

logger = logging.getLogger(__name__)

StoreListener = Callable[[LocationStoreEvent], None]

POPULAR_LOCATIONS: List[Location] = [
    Location(id="sydney", name="Sydney, Australia", latitude=-33.8688, longitude=151.2093),
    Location(id="miami", name="Miami Beach, Florida", latitude=25.7907, longitude=-80.1300),
    Location(id="honolulu", name="Honolulu, Hawaii", latitude=21.3069, longitude=-157.8583),
    Location(id="capetown", name="Cape Town, South Africa", latitude=-33.9249, longitude=18.4241),
    Location(id="dubai", name="Dubai Marina, UAE", latitude=25.0817, longitude=55.1361),
    Location(id="rio", name="Rio de Janeiro, Brazil", latitude=-22.9068, longitude=-43.1729),
    Location(id="venice", name="Venice, Italy", latitude=45.4408, longitude=12.3155),
    Location(id="maldives", name="Male, Maldives", latitude=4.1755, longitude=73.5093),
]

class LocationStore:
    """Holds the selectable locations and the single selected location.

    State changes are published to subscribers as LocationStoreEvents, so
    consumers react to a selection instead of polling the store.
    """

    def __init__(self, geocoder: Geocoder, popular_locations: Optional[List[Location]] = None):
        self.geocoder = geocoder
        self.popular_locations: List[Location] = list(popular_locations or POPULAR_LOCATIONS)
        self.search_results: List[Location] = list(self.popular_locations)
        self.selected_location: Optional[Location] = None
        self.query: str = ""
        self._saved_locations: Dict[str, Location] = {}
        self._listeners: List[StoreListener] = []

    @property
    def not_found(self) -> bool:
        """True when a non-empty search left no results."""
        return bool(self.query.strip()) and not self.search_results

    def subscribe(self, listener: StoreListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: StoreListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, kind: LocationStoreEventKind) -> None:
        event = LocationStoreEvent(
            kind=kind,
            location=self.selected_location,
            results=list(self.search_results)
        )
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logger.error(f"Error in location store listener for {kind.value}: {str(e)}")

    def _set_results(self, locations: List[Location]) -> None:
        self.search_results = list(locations)
        self._notify(LocationStoreEventKind.RESULTS_CHANGED)

    def reset_to_popular(self) -> None:
        """Show the popular locations again."""
        self.query = ""
        self._set_results(self.popular_locations)

    def clear_results(self) -> None:
        """Empty the result list, as when the search field is cleared."""
        self.query = ""
        self._set_results([])

    async def search(self, query: str) -> List[Location]:
        """Search for locations by free text.

        Geocoding problems never propagate: they leave an empty result list
        that callers show as "not found". Results of a search that was
        superseded while waiting on the geocoder are discarded.
        """
        self.query = query
        text = query.strip()
        if not text:
            self.reset_to_popular()
            return self.search_results

        try:
            locations = await self.geocoder.forward_geocode(text)
        except NoResults:
            logger.info(f"No locations found for '{text}'")
            locations = []
        except GeocodingFailure as e:
            logger.error(f"Geocoding error for '{text}': {str(e)}")
            locations = []

        if self.query != query:
            logger.debug(f"Discarding results for superseded search '{text}'")
            return locations

        for location in locations:
            self._saved_locations[location.id] = location

        self._set_results(locations)
        return locations

    def get_location(self, location_id: str) -> Optional[Location]:
        """Look up a location among cached, listed and popular locations."""
        if location_id in self._saved_locations:
            return self._saved_locations[location_id]
        for location in [*self.search_results, *self.popular_locations]:
            if location.id == location_id:
                return location
        return None

    def select(self, location: Location) -> None:
        """Make a location the current selection."""
        self._saved_locations[location.id] = location
        if location == self.selected_location:
            return
        self.selected_location = location
        logger.info(f"📍 Selected {location.name} ({location.formatted_coordinates})")
        self._notify(LocationStoreEventKind.SELECTION_CHANGED)

    async def select_by_id(self, location_id: str) -> Location:
        """Select a location by id, resolving composite ids through the geocoder."""
        location = await self.restore(location_id)
        if location is None:
            raise LocationNotFound(f"Location {location_id} not found")
        return location

    async def restore(self, location_id: str) -> Optional[Location]:
        """Bring back a previously selected location.

        Known ids are served from the local cache. Otherwise the id is read as
        a composite "<lat>,<lng>" id and the place is looked up by reverse
        geocoding. Returns None when the location cannot be recovered.
        """
        location = self.get_location(location_id)
        if location is not None:
            self.select(location)
            return location

        coordinate = parse_location_id(location_id)
        if coordinate is None:
            logger.warning(f"Cannot restore location from id '{location_id}'")
            return None

        latitude, longitude = coordinate
        try:
            place = await self.geocoder.reverse_geocode(latitude, longitude)
        except (NoResults, GeocodingFailure) as e:
            logger.error(f"Reverse geocoding error for {location_id}: {str(e)}")
            return None

        if place is None:
            logger.warning(f"No place found at {location_id}")
            return None

        location = Location(
            id=location_id,
            name=place.name,
            latitude=latitude,
            longitude=longitude
        )
        self.select(location)
        return location
