import math
from typing import Optional, Tuple

MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0

def is_valid_coordinate(latitude: float, longitude: float) -> bool:
    """Check that a coordinate lies within the geographic range."""
    return (
        MIN_LATITUDE <= latitude <= MAX_LATITUDE
        and MIN_LONGITUDE <= longitude <= MAX_LONGITUDE
    )

def format_coordinates(latitude: float, longitude: float) -> str:
    """Format a coordinate for display, e.g. ``33.9°S 151.2°E``."""
    lat_direction = "N" if latitude >= 0 else "S"
    lon_direction = "E" if longitude >= 0 else "W"
    return f"{abs(latitude):.1f}°{lat_direction} {abs(longitude):.1f}°{lon_direction}"

def make_location_id(latitude: float, longitude: float) -> str:
    """Build the composite ``"<lat>,<lng>"`` id used for searched locations.

    The composite id is a private cache key that lets a saved selection be
    looked up again by reverse geocoding. It is not a stable public identifier.
    """
    return f"{float(latitude)!r},{float(longitude)!r}"

def parse_location_id(location_id: str) -> Optional[Tuple[float, float]]:
    """Parse a composite id back into ``(latitude, longitude)``.

    Returns None for anything that is not exactly two finite numbers
    within the geographic range.
    """
    if not location_id:
        return None

    components = location_id.split(",")
    if len(components) != 2:
        return None

    try:
        latitude = float(components[0].strip())
        longitude = float(components[1].strip())
    except ValueError:
        return None

    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return None
    if not is_valid_coordinate(latitude, longitude):
        return None

    return latitude, longitude
