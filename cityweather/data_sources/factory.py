"""Factory helpers for choosing city and weather data sources at startup."""

from __future__ import annotations

from functools import partial

from cityweather import config
from cityweather.data_sources.base import (
    CallableCityDataSource,
    CallableWeatherDataSource,
    CityDataSource,
    WeatherDataSource,
)
from cityweather.data_sources.opendatasoft_client import fetch_cities
from cityweather.data_sources.openweather_client import (
    fetch_forecast_samples,
    fetch_weather_current,
)
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_CITY_SOURCE = "opendatasoft"
DEFAULT_WEATHER_SOURCE = "openweathermap"


def build_city_source(settings: config.Settings | None = None) -> CityDataSource:
    """Instantiate the configured city directory source."""
    settings = settings or config.settings
    source = (settings.city_source or DEFAULT_CITY_SOURCE).lower()

    if source == "opendatasoft":
        logger.info("Using OpenDataSoft city source", extra={"dataset": settings.city_dataset})
        return CallableCityDataSource(
            cities=partial(
                fetch_cities,
                api_url=settings.city_api_url,
                dataset=settings.city_dataset,
                timeout=settings.request_timeout_seconds,
            )
        )

    raise ValueError(f"Unknown city source '{source}'")


def build_weather_source(settings: config.Settings | None = None) -> WeatherDataSource:
    """Instantiate the configured weather source."""
    settings = settings or config.settings
    source = (settings.weather_source or DEFAULT_WEATHER_SOURCE).lower()

    if source == "openweathermap":
        if not settings.weather_api_key:
            logger.warning("No weather API key configured; set CITYWX_WEATHER_API_KEY")
        logger.info("Using OpenWeatherMap weather source", extra={"units": settings.weather_units})
        common = {
            "api_key": settings.weather_api_key,
            "units": settings.weather_units,
            "api_url": settings.weather_api_url,
            "timeout": settings.request_timeout_seconds,
        }
        return CallableWeatherDataSource(
            weather_current=partial(fetch_weather_current, **common),
            forecast_samples=partial(fetch_forecast_samples, **common),
        )

    raise ValueError(f"Unknown weather source '{source}'")
