"""
Synthetic tide series generation.

Heights follow a deterministic sine curve whose amplitude depends on
latitude and whose phase depends on longitude:

    amplitude = 1.5 + 0.5 * sin(lat)
    phase     = 2π * cos(lng)
    h_i       = 2.0 + amplitude * sin(4π * i / 48 + phase)

This is not a tidal model. It gives two cycles over 24 hours so the chart
has something plausible to show.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

import numpy as np

from features.common.exceptions.tide_exceptions import InvalidLocation
from features.locations.models.location_types import Location
from features.tides.models.tide_types import (
    ExtremeType,
    TideExtreme,
    TideHeightSample,
    TideSeries
)
from core.config import settings

logger = logging.getLogger(__name__)

MEAN_HEIGHT = 2.0  # meters
BASE_AMPLITUDE = 1.5
LATITUDE_AMPLITUDE = 0.5
CYCLES_PER_SERIES = 2

# Extremes are picked by index, not by finding turning points:
# every 12th sample, high on multiples of 24 and low otherwise.
EXTREME_EVERY = 12
HIGH_EVERY = 24

def tide_amplitude(latitude: float) -> float:
    """Amplitude of the curve, between 1.0 and 2.0 meters."""
    return BASE_AMPLITUDE + LATITUDE_AMPLITUDE * float(np.sin(np.radians(latitude)))

def tide_phase_shift(longitude: float) -> float:
    """Phase of the curve in radians."""
    return 2 * np.pi * float(np.cos(np.radians(longitude)))

def generate_tide_series(
    location: Location,
    now: datetime,
    sample_count: Optional[int] = None,
    interval_minutes: Optional[int] = None
) -> TideSeries:
    """Generate the tide series for a location starting at `now`.

    Raises:
        InvalidLocation: If the location's coordinate is out of range.
    """
    if not location.has_valid_coordinates:
        raise InvalidLocation(location.latitude, location.longitude)

    sample_count = sample_count or settings.sample_count
    interval_minutes = interval_minutes or settings.sample_interval_minutes

    amplitude = tide_amplitude(location.latitude)
    phase_shift = tide_phase_shift(location.longitude)

    indices = np.arange(sample_count)
    progress = indices / sample_count
    heights = MEAN_HEIGHT + amplitude * np.sin(2 * CYCLES_PER_SERIES * np.pi * progress + phase_shift)

    samples = []
    extremes = []
    for i, height in zip(indices.tolist(), heights.tolist()):
        time = now + timedelta(minutes=interval_minutes * i)
        samples.append(TideHeightSample(time=time, height=height))

        if i % EXTREME_EVERY == 0:
            extreme_type = ExtremeType.HIGH if i % HIGH_EVERY == 0 else ExtremeType.LOW
            extremes.append(TideExtreme(time=time, height=height, type=extreme_type))

    logger.debug(
        f"Generated {len(samples)} samples for {location.id} "
        f"(amplitude {amplitude:.2f} m, phase {phase_shift:.2f} rad)"
    )

    return TideSeries(
        location_id=location.id,
        generated_at=now,
        samples=samples,
        extremes=extremes
    )
