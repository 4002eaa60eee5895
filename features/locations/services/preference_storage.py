import json
import logging
from pathlib import Path
from typing import Optional

from core.config import settings

logger = logging.getLogger(__name__)

SAVED_LOCATION_KEY = "savedLocation"

class PreferenceStorage:
    """Persists the id of the last selected location as a small JSON file."""

    def __init__(self, file_path: Optional[str] = None):
        self.file_path = Path(file_path or settings.preferences_file)

    def _ensure_storage_dir(self) -> None:
        """Ensure the storage directory exists."""
        self.file_path.parent.mkdir(parents=True, exist_ok=True)

    def load_saved_location(self) -> Optional[str]:
        """Read the saved location id, or None when nothing usable is stored."""
        if not self.file_path.exists():
            return None

        try:
            with open(self.file_path, 'r') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable preferences file {self.file_path}: {str(e)}")
            return None

        saved = data.get(SAVED_LOCATION_KEY) if isinstance(data, dict) else None
        return saved if isinstance(saved, str) and saved else None

    def save_location(self, location_id: str) -> bool:
        """Write the saved location id."""
        try:
            self._ensure_storage_dir()
            with open(self.file_path, 'w') as f:
                json.dump({SAVED_LOCATION_KEY: location_id}, f)
            return True
        except OSError as e:
            logger.error(f"Error saving location preference to {self.file_path}: {str(e)}")
            return False
