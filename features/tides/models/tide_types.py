from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

class ExtremeType(str, Enum):
    """Kind of tide extreme."""
    HIGH = "high"
    LOW = "low"

class TideHeightSample(BaseModel):
    """Tide height at a point in time"""
    model_config = ConfigDict(frozen=True)

    time: datetime = Field(..., description="Time of the sample")
    height: float = Field(..., description="Height of tide in meters")

class TideExtreme(BaseModel):
    """High or low tide"""
    model_config = ConfigDict(frozen=True)

    time: datetime = Field(..., description="Time of the extreme")
    height: float = Field(..., description="Height of tide in meters")
    type: ExtremeType = Field(..., description="High or low tide")

class TideSeries(BaseModel):
    """24 hours of generated tide heights for one location"""
    model_config = ConfigDict(frozen=True)

    location_id: Optional[str] = Field(None, description="Location the series was generated for")
    generated_at: datetime = Field(..., description="Start of the series")
    samples: List[TideHeightSample] = Field(..., description="Half-hourly tide heights")
    extremes: List[TideExtreme] = Field(..., description="High and low tides")

class HeightRange(BaseModel):
    """Vertical chart bounds"""
    min: float
    max: float

class TideWindow(BaseModel):
    """Part of a tide series around the current time"""
    model_config = ConfigDict(frozen=True)

    start: datetime = Field(..., description="Start of the window (inclusive)")
    end: datetime = Field(..., description="End of the window (inclusive)")
    samples: List[TideHeightSample] = Field(..., description="Tide heights inside the window")
    extremes: List[TideExtreme] = Field(..., description="Extremes inside the window")
    current_height: float = Field(..., description="Height of the sample closest to now")
    height_range: HeightRange = Field(..., description="Padded chart bounds for the visible heights")

class TideExtremesSummary(BaseModel):
    """Extremes grouped into high and low tides"""
    high: List[TideExtreme] = Field(default_factory=list)
    low: List[TideExtreme] = Field(default_factory=list)
