class TideTimesError(Exception):
    """Base exception for tide times errors."""
    pass

class InvalidLocation(TideTimesError):
    """Raised when a coordinate is outside the valid latitude/longitude range."""

    def __init__(self, latitude: float, longitude: float):
        self.latitude = latitude
        self.longitude = longitude
        super().__init__(f"Invalid coordinates ({latitude}, {longitude})")

class LocationError(TideTimesError):
    """Base exception for location lookup errors."""
    pass

class NoResults(LocationError):
    """Raised when geocoding yields no locations."""
    pass

class GeocodingFailure(LocationError):
    """Raised when the geocoding service cannot be reached or answers with an error."""
    pass

class LocationNotFound(LocationError):
    """Raised when a location id is neither cached nor a known default."""
    pass
