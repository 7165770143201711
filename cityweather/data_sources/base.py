"""Interfaces and helpers for city and weather data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Protocol

from cityweather.domain import City, CurrentWeather, ForecastSample


class CityDataSource(Protocol):
    """Interface for anything that can page through the city directory."""

    def fetch_cities(
        self,
        start: int = 0,
        rows: int = 20,
        *,
        query: str = "",
        sort_column: str = "name",
        sort_direction: str = "asc",
    ) -> tuple[List[City], int]:
        """Return one page of cities and the total number of matches."""
        ...


class WeatherDataSource(Protocol):
    """Interface for anything that can provide current weather and forecast samples."""

    def fetch_weather_current(self, latitude: float, longitude: float) -> CurrentWeather:
        """Return the current weather observation."""
        ...

    def fetch_forecast_samples(self, latitude: float, longitude: float) -> List[ForecastSample]:
        """Return the raw 3-hour forecast samples."""
        ...


@dataclass
class CallableCityDataSource(CityDataSource):
    """Wrap a page-fetching callable so it can be swapped for tests or other backends."""

    cities: Callable[..., tuple[List[City], int]]

    def fetch_cities(self, *args, **kwargs) -> tuple[List[City], int]:
        return self.cities(*args, **kwargs)


@dataclass
class CallableWeatherDataSource(WeatherDataSource):
    """Wrap two callables so they can be swapped for different backends."""

    weather_current: Callable[..., CurrentWeather]
    forecast_samples: Callable[..., List[ForecastSample]]

    def fetch_weather_current(self, *args, **kwargs) -> CurrentWeather:
        """Delegate to the configured current-weather callable."""
        return self.weather_current(*args, **kwargs)

    def fetch_forecast_samples(self, *args, **kwargs) -> List[ForecastSample]:
        """Delegate to the configured forecast callable."""
        return self.forecast_samples(*args, **kwargs)
