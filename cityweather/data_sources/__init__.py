"""Data sources for the city directory and weather APIs."""

from .base import (
    CallableCityDataSource,
    CallableWeatherDataSource,
    CityDataSource,
    WeatherDataSource,
)
from .factory import build_city_source, build_weather_source
from .opendatasoft_client import fetch_cities
from .openweather_client import fetch_forecast_samples, fetch_weather_current

__all__ = [
    "build_city_source",
    "build_weather_source",
    "CityDataSource",
    "WeatherDataSource",
    "CallableCityDataSource",
    "CallableWeatherDataSource",
    "fetch_cities",
    "fetch_forecast_samples",
    "fetch_weather_current",
]
