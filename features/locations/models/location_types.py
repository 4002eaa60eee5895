from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from features.common.utils.coordinates import format_coordinates, is_valid_coordinate

class Location(BaseModel):
    """A named coastal coordinate."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Location identifier")
    name: str = Field(..., description="Display name")
    latitude: float = Field(..., description="Latitude in degrees")
    longitude: float = Field(..., description="Longitude in degrees")

    @property
    def has_valid_coordinates(self) -> bool:
        return is_valid_coordinate(self.latitude, self.longitude)

    @property
    def formatted_coordinates(self) -> str:
        return format_coordinates(self.latitude, self.longitude)

class LocationResponse(Location):
    """Location with its display coordinates"""
    coordinates: str = Field(..., description="Formatted coordinates, e.g. 33.9°S 151.2°E")

    @classmethod
    def from_location(cls, location: Location) -> "LocationResponse":
        return cls(
            **location.model_dump(),
            coordinates=location.formatted_coordinates
        )

class LocationSearchResponse(BaseModel):
    """Current location search state"""
    query: str = Field("", description="Last search text")
    not_found: bool = Field(False, description="True when a non-empty search found nothing")
    results: List[LocationResponse] = Field(..., description="Locations to choose from")

class SearchRequest(BaseModel):
    query: str = Field("", description="Search text; empty resets to popular locations")

class SelectLocationRequest(BaseModel):
    id: str = Field(..., description="Id of a listed, cached or composite location")

class LocationStoreEventKind(str, Enum):
    """Kinds of change published by the location store."""
    SELECTION_CHANGED = "selection_changed"
    RESULTS_CHANGED = "results_changed"

class LocationStoreEvent(BaseModel):
    """Change notification delivered to store subscribers."""
    model_config = ConfigDict(frozen=True)

    kind: LocationStoreEventKind
    location: Optional[Location] = None
    results: List[Location] = Field(default_factory=list)
