import logging
from typing import List, Optional

from features.common.services.debouncer import Debouncer
from features.locations.models.location_types import Location
from features.locations.services.location_store import LocationStore
from core.config import settings

logger = logging.getLogger(__name__)

class SearchController:
    """Turns search-field edits into debounced location searches."""

    def __init__(self, store: LocationStore, debouncer: Optional[Debouncer] = None):
        self.store = store
        self.debouncer = debouncer or Debouncer(settings.search_debounce_seconds)
        self.query: str = ""

    def update_query(self, text: str) -> None:
        """Handle a change of the search text.

        Non-empty text schedules a search after the debounce delay; empty
        text drops any scheduled search and shows the popular list again.
        """
        self.query = text
        if not text.strip():
            self.debouncer.cancel()
            self.store.reset_to_popular()
            return

        logger.debug(f"Scheduling search for '{text}'")
        self.debouncer.debounce(lambda: self.store.search(text))

    async def submit_query(self, text: Optional[str] = None) -> List[Location]:
        """Search right away, skipping the debounce delay."""
        self.debouncer.cancel()
        if text is not None:
            self.query = text
        return await self.store.search(self.query)

    def clear(self) -> None:
        """Clear the search field and its results."""
        self.debouncer.cancel()
        self.query = ""
        self.store.clear_results()

    async def shutdown(self) -> None:
        await self.debouncer.shutdown()
