import logging
from typing import Optional

from features.common.exceptions.tide_exceptions import InvalidLocation
from features.locations.models.location_types import (
    Location,
    LocationStoreEvent,
    LocationStoreEventKind
)
from features.locations.services.location_store import LocationStore
from features.locations.services.preference_storage import PreferenceStorage
from features.tides.services.tide_service import TideService

logger = logging.getLogger(__name__)

class TideSession:
    """Keeps the tide series and the saved selection in step with the location store."""

    def __init__(
        self,
        store: LocationStore,
        tide_service: TideService,
        preferences: PreferenceStorage
    ):
        self.store = store
        self.tide_service = tide_service
        self.preferences = preferences
        self.store.subscribe(self._on_store_event)

    def _on_store_event(self, event: LocationStoreEvent) -> None:
        if event.kind != LocationStoreEventKind.SELECTION_CHANGED or event.location is None:
            return

        try:
            self.tide_service.load(event.location)
        except InvalidLocation as e:
            logger.error(f"Skipping tide generation for {event.location.id}: {str(e)}")

        self.preferences.save_location(event.location.id)

    async def restore_saved(self) -> Optional[Location]:
        """Select the location saved by a previous run, if it can be recovered."""
        saved_id = self.preferences.load_saved_location()
        if not saved_id:
            return None

        logger.info(f"Restoring saved location {saved_id}")
        location = await self.store.restore(saved_id)
        if location is None:
            logger.warning(f"Could not restore saved location {saved_id}")
        return location

    def close(self) -> None:
        self.store.unsubscribe(self._on_store_event)
