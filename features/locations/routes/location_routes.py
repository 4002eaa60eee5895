from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from features.common.exceptions.tide_exceptions import LocationNotFound
from features.locations.models.location_types import (
    LocationResponse,
    LocationSearchResponse,
    SearchRequest,
    SelectLocationRequest
)
from features.locations.services.location_store import LocationStore
from features.locations.services.search_controller import SearchController

router = APIRouter(
    prefix="/locations",
    tags=["Locations"]
)

def get_store(request: Request) -> LocationStore:
    """Dependency to get the LocationStore instance."""
    return request.app.state.location_store

def get_search_controller(request: Request) -> SearchController:
    """Dependency to get the SearchController instance."""
    return request.app.state.search_controller

def _search_response(store: LocationStore) -> LocationSearchResponse:
    return LocationSearchResponse(
        query=store.query,
        not_found=store.not_found,
        results=[LocationResponse.from_location(location) for location in store.search_results]
    )

@router.get(
    "",
    response_model=LocationSearchResponse,
    summary="Get current location results",
    description="Returns the locations currently offered for selection: popular locations or the latest search results"
)
async def get_locations(
    store: LocationStore = Depends(get_store)
) -> LocationSearchResponse:
    """Get the current location list."""
    return _search_response(store)

@router.get(
    "/popular",
    response_model=List[LocationResponse],
    summary="Get popular locations",
    description="Returns the built-in list of popular coastal locations"
)
async def get_popular_locations(
    store: LocationStore = Depends(get_store)
) -> List[LocationResponse]:
    """Get popular locations."""
    return [LocationResponse.from_location(location) for location in store.popular_locations]

@router.get(
    "/search",
    response_model=LocationSearchResponse,
    summary="Search locations",
    description="Searches for locations by name right away. An empty query returns the popular locations"
)
async def search_locations(
    q: str = Query("", description="City, region, or landmark"),
    controller: SearchController = Depends(get_search_controller)
) -> LocationSearchResponse:
    """Search locations immediately."""
    await controller.submit_query(q)
    return _search_response(controller.store)

@router.post(
    "/search",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Update search text",
    description="Schedules a debounced search for the given text. Poll GET /locations for results"
)
async def update_search(
    body: SearchRequest,
    controller: SearchController = Depends(get_search_controller)
):
    """Update the search text."""
    controller.update_query(body.query)
    return {
        "query": controller.query,
        "pending": controller.debouncer.pending
    }

@router.delete(
    "/search",
    response_model=LocationSearchResponse,
    summary="Clear search",
    description="Clears the search text and its results"
)
async def clear_search(
    controller: SearchController = Depends(get_search_controller)
) -> LocationSearchResponse:
    """Clear the search."""
    controller.clear()
    return _search_response(controller.store)

@router.get(
    "/selected",
    response_model=LocationResponse,
    summary="Get selected location",
    description="Returns the currently selected location"
)
async def get_selected_location(
    store: LocationStore = Depends(get_store)
) -> LocationResponse:
    """Get the selected location."""
    if store.selected_location is None:
        raise HTTPException(status_code=404, detail="No location selected")
    return LocationResponse.from_location(store.selected_location)

@router.put(
    "/selected",
    response_model=LocationResponse,
    summary="Select a location",
    description="Selects a listed location or a composite \"<lat>,<lng>\" id and regenerates its tide data"
)
async def select_location(
    body: SelectLocationRequest,
    store: LocationStore = Depends(get_store)
) -> LocationResponse:
    """Select a location."""
    try:
        location = await store.select_by_id(body.id)
    except LocationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return LocationResponse.from_location(location)
