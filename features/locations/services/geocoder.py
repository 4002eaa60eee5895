import asyncio
import logging
import aiohttp
from typing import Any, Dict, List, Optional, Protocol

from features.common.exceptions.tide_exceptions import GeocodingFailure, NoResults
from features.common.utils.coordinates import make_location_id
from features.locations.models.location_types import Location
from core.config import settings

logger = logging.getLogger(__name__)

class Geocoder(Protocol):
    async def forward_geocode(self, text: str) -> List[Location]: ...

    async def reverse_geocode(self, latitude: float, longitude: float) -> Optional[Location]: ...

class NominatimGeocoder:
    """Geocoding client for an OpenStreetMap Nominatim compatible service."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[int] = None,
        limit: Optional[int] = None
    ):
        self.base_url = (base_url or settings.geocoder_base_url).rstrip("/")
        self.user_agent = user_agent or settings.geocoder_user_agent
        self.timeout = timeout or settings.geocoder_timeout
        self.limit = limit or settings.geocoder_result_limit
        self._session: Optional[aiohttp.ClientSession] = None

    async def _init_session(self) -> aiohttp.ClientSession:
        if not self._session:
            self._session = aiohttp.ClientSession(
                headers={
                    "User-Agent": self.user_agent,
                    "Accept": "application/json",
                },
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self._session

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None

    async def _get_json(self, path: str, params: Dict[str, Any]) -> Any:
        try:
            session = await self._init_session()
            async with session.get(f"{self.base_url}{path}", params=params) as response:
                response.raise_for_status()
                return await response.json(content_type=None)
        except aiohttp.ClientError as e:
            raise GeocodingFailure(f"Geocoding request to {path} failed: {str(e)}") from e
        except asyncio.TimeoutError as e:
            raise GeocodingFailure(f"Geocoding request to {path} timed out") from e
        except ValueError as e:
            raise GeocodingFailure(f"Invalid geocoding response from {path}: {str(e)}") from e

    def _parse_place(self, place: Dict[str, Any], location_id: Optional[str] = None) -> Optional[Location]:
        """Turn a Nominatim place into a Location, skipping places without a name or coordinate."""
        try:
            latitude = float(place["lat"])
            longitude = float(place["lon"])
        except (KeyError, TypeError, ValueError):
            return None

        name = place.get("name") or (place.get("display_name") or "").split(",")[0].strip()
        if not name:
            return None

        return Location(
            id=location_id or make_location_id(latitude, longitude),
            name=name,
            latitude=latitude,
            longitude=longitude
        )

    async def forward_geocode(self, text: str) -> List[Location]:
        """Find locations matching free text."""
        data = await self._get_json("/search", {
            "q": text,
            "format": "jsonv2",
            "limit": self.limit,
        })

        if not isinstance(data, list):
            raise GeocodingFailure("Unexpected search response from geocoder")

        locations = [
            location
            for location in (self._parse_place(place) for place in data if isinstance(place, dict))
            if location is not None
        ]
        if not locations:
            raise NoResults(f"No locations found for '{text}'")

        logger.debug(f"Geocoded '{text}' to {len(locations)} locations")
        return locations

    async def reverse_geocode(self, latitude: float, longitude: float) -> Optional[Location]:
        """Find the named place at a coordinate."""
        data = await self._get_json("/reverse", {
            "lat": latitude,
            "lon": longitude,
            "format": "jsonv2",
        })

        if not isinstance(data, dict) or "error" in data:
            return None

        # Keep the caller's coordinate so the composite id round-trips
        place = {**data, "lat": latitude, "lon": longitude}
        return self._parse_place(place, location_id=make_location_id(latitude, longitude))
