import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

from features.common.exceptions.tide_exceptions import InvalidLocation
from features.common.utils.coordinates import format_coordinates, make_location_id
from features.locations.models.location_types import Location
from features.tides.models.tide_types import TideExtremesSummary, TideSeries, TideWindow
from features.tides.services.tide_generator import generate_tide_series
from features.tides.services.tide_window import split_extremes, visible_window

logger = logging.getLogger(__name__)

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

class TideService:
    """Holds the tide series for the selected location."""

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        """Initialize TideService."""
        self._clock = clock
        # Location and series are swapped together so readers never see a mix
        self._current: Optional[Tuple[Location, TideSeries]] = None

    @property
    def current_location(self) -> Optional[Location]:
        return self._current[0] if self._current else None

    @property
    def current_series(self) -> Optional[TideSeries]:
        return self._current[1] if self._current else None

    def load(self, location: Location, now: Optional[datetime] = None) -> TideSeries:
        """Generate a fresh series for a location, replacing the previous one.

        Raises:
            InvalidLocation: If the coordinate is out of range. The previous
                series is kept.
        """
        try:
            series = generate_tide_series(location, now or self._clock())
        except InvalidLocation as e:
            logger.warning(f"Keeping previous tide series: {str(e)}")
            raise

        self._current = (location, series)
        logger.info(f"🌊 Generated tide series for {location.name}")
        return series

    def window(self, now: Optional[datetime] = None) -> Optional[TideWindow]:
        """Visible part of the current series, or None if nothing is loaded."""
        series = self.current_series
        if series is None:
            return None
        return visible_window(series, now or self._clock())

    def extremes_summary(self) -> Optional[TideExtremesSummary]:
        """High and low tides of the current series, or None if nothing is loaded."""
        series = self.current_series
        if series is None:
            return None
        return split_extremes(series.extremes)

    def preview(self, latitude: float, longitude: float, now: Optional[datetime] = None) -> TideSeries:
        """Generate a series for any coordinate without changing the current one."""
        location = Location(
            id=make_location_id(latitude, longitude),
            name=format_coordinates(latitude, longitude),
            latitude=latitude,
            longitude=longitude
        )
        return generate_tide_series(location, now or self._clock())
