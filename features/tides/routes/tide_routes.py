from datetime import datetime, timezone
from typing import Optional
from fastapi import APIRouter, HTTPException, Depends, Query, Request

from features.common.exceptions.tide_exceptions import InvalidLocation
from features.tides.models.tide_types import TideExtremesSummary, TideSeries, TideWindow
from features.tides.services.tide_service import TideService

router = APIRouter(
    prefix="/tides",
    tags=["Tides"]
)

def get_service(request: Request) -> TideService:
    """Dependency to get the TideService instance."""
    return request.app.state.tide_service

def _no_series() -> HTTPException:
    return HTTPException(status_code=404, detail="No location selected")

def _as_utc(now: Optional[datetime]) -> Optional[datetime]:
    """Treat naive query times as UTC so they compare with generated times."""
    if now is not None and now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now

@router.get(
    "",
    response_model=TideSeries,
    summary="Get tide series",
    description="Returns 24 hours of half-hourly tide heights and extremes for the selected location"
)
async def get_tide_series(
    service: TideService = Depends(get_service)
) -> TideSeries:
    """Get the tide series for the selected location."""
    series = service.current_series
    if series is None:
        raise _no_series()
    return series

@router.get(
    "/window",
    response_model=TideWindow,
    summary="Get visible tide window",
    description="Returns the tide heights within six hours of the given time (default: now) and the current height"
)
async def get_tide_window(
    now: Optional[datetime] = None,
    service: TideService = Depends(get_service)
) -> TideWindow:
    """Get the visible part of the tide series."""
    window = service.window(_as_utc(now))
    if window is None:
        raise _no_series()
    return window

@router.get(
    "/extremes",
    response_model=TideExtremesSummary,
    summary="Get high and low tides",
    description="Returns the high and low tides of the selected location's series"
)
async def get_tide_extremes(
    service: TideService = Depends(get_service)
) -> TideExtremesSummary:
    """Get high and low tides."""
    summary = service.extremes_summary()
    if summary is None:
        raise _no_series()
    return summary

@router.get(
    "/preview",
    response_model=TideSeries,
    summary="Preview tides for a coordinate",
    description="Generates a tide series for any coordinate without changing the selection"
)
async def preview_tides(
    lat: float = Query(..., description="Latitude"),
    lng: float = Query(..., description="Longitude"),
    now: Optional[datetime] = None,
    service: TideService = Depends(get_service)
) -> TideSeries:
    """Generate a tide series for a coordinate."""
    try:
        return service.preview(lat, lng, _as_utc(now))
    except InvalidLocation as e:
        raise HTTPException(status_code=422, detail=str(e))
