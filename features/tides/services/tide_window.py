import logging
from datetime import datetime, timedelta
from typing import List, Optional

import numpy as np

from features.tides.models.tide_types import (
    ExtremeType,
    HeightRange,
    TideExtreme,
    TideExtremesSummary,
    TideSeries,
    TideWindow
)
from core.config import settings

logger = logging.getLogger(__name__)

HEIGHT_RANGE_PADDING = 0.1  # Fraction of the visible span added above and below
DEFAULT_MIN_HEIGHT = 0.0
DEFAULT_MAX_HEIGHT = 1.0

def current_height(series: TideSeries, now: datetime) -> float:
    """Height of the sample closest to `now`, the earliest one on ties; 0 for an empty series."""
    if not series.samples:
        return 0.0

    offsets = np.array([abs((sample.time - now).total_seconds()) for sample in series.samples])
    return series.samples[int(np.argmin(offsets))].height

def height_range(heights: List[float]) -> HeightRange:
    """Chart bounds for a set of heights, padded by a tenth of their span."""
    low = min(heights) if heights else DEFAULT_MIN_HEIGHT
    high = max(heights) if heights else DEFAULT_MAX_HEIGHT
    buffer = (high - low) * HEIGHT_RANGE_PADDING
    return HeightRange(min=low - buffer, max=high + buffer)

def visible_window(series: TideSeries, now: datetime, window_hours: Optional[int] = None) -> TideWindow:
    """Slice a series to the hours either side of `now`.

    Both ends are inclusive. A window that misses the series entirely is
    returned empty rather than treated as an error.
    """
    span = timedelta(hours=window_hours if window_hours is not None else settings.window_hours)
    start = now - span
    end = now + span

    samples = [sample for sample in series.samples if start <= sample.time <= end]
    extremes = [extreme for extreme in series.extremes if start <= extreme.time <= end]

    if not samples:
        logger.debug(f"No samples between {start.isoformat()} and {end.isoformat()}")

    return TideWindow(
        start=start,
        end=end,
        samples=samples,
        extremes=extremes,
        current_height=current_height(series, now),
        height_range=height_range([sample.height for sample in samples])
    )

def split_extremes(extremes: List[TideExtreme]) -> TideExtremesSummary:
    """Group extremes into high and low tides, keeping time order."""
    return TideExtremesSummary(
        high=[extreme for extreme in extremes if extreme.type == ExtremeType.HIGH],
        low=[extreme for extreme in extremes if extreme.type == ExtremeType.LOW]
    )
