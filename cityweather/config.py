"""Application configuration pulled from environment variables via pydantic."""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the city weather browser."""
    model_config = SettingsConfigDict(env_prefix="CITYWX_", extra="ignore")

    city_source: str = "opendatasoft"  # options: opendatasoft
    city_api_url: str = "https://public.opendatasoft.com/api/records/1.0/search"
    city_dataset: str = "geonames-all-cities-with-a-population-1000"
    weather_source: str = "openweathermap"  # options: openweathermap
    weather_api_url: str = "https://api.openweathermap.org/data/2.5"
    weather_api_key: str | None = None
    weather_units: str = "metric"
    weather_ttl_seconds: int = 30 * 60
    forecast_days: int = 5
    page_size: int = 20
    search_page_size: int = 10
    request_timeout_seconds: float = 10.0
    log_level: str = "INFO"

    @field_validator("city_api_url", "weather_api_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs so path joins never produce double slashes."""
        return str(v).rstrip("/")


settings = Settings()


if __name__ == "__main__":
    logger.logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4, exclude={'weather_api_key'})}")
