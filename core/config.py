from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """Application settings."""

    # Geocoding (OpenStreetMap Nominatim compatible)
    geocoder_base_url: str = "https://nominatim.openstreetmap.org"
    geocoder_user_agent: str = "TideTimes/1.0 (https://github.com/tide-times/tide-times-api)"
    geocoder_timeout: int = 10  # seconds
    geocoder_result_limit: int = 10

    # Location search
    search_debounce_seconds: float = 0.5

    # Persisted selection
    preferences_file: str = "data/preferences.json"

    # Synthetic tide series
    sample_count: int = 48  # 24 hours of half-hourly samples
    sample_interval_minutes: int = 30
    window_hours: int = 6  # Hours shown either side of "now"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="tide_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
