"""Helpers for fetching current weather and 3-hour forecasts from OpenWeatherMap."""
from __future__ import annotations

from typing import Iterable, List, Tuple

import requests

from cityweather.config import settings
from cityweather.domain import CurrentWeather, ForecastSample, WeatherCondition
from cityweather.models import (
    ConditionPayload,
    CurrentWeatherResponse,
    ForecastResponse,
)
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="openweather_client")

session = requests.Session()


def _conditions(payload: Iterable[ConditionPayload]) -> Tuple[WeatherCondition, ...]:
    """Convert condition payloads into immutable WeatherCondition tuples."""
    return tuple(
        WeatherCondition(id=c.id, main=c.main, description=c.description, icon=c.icon)
        for c in payload
    )


def _get(endpoint: str, latitude: float, longitude: float, *, api_key: str | None,
         units: str, api_url: str | None, timeout: float | None) -> dict:
    """Issue a GET against `endpoint` for the given coordinates and return the JSON body."""
    params = {
        "lat": latitude,
        "lon": longitude,
        "appid": api_key if api_key is not None else (settings.weather_api_key or ""),
        "units": units,
    }
    url = f"{api_url or settings.weather_api_url}/{endpoint}"
    logger.debug("Requesting weather", extra={"endpoint": endpoint, "lat": latitude, "lon": longitude})
    resp = session.get(url, params=params, timeout=timeout or settings.request_timeout_seconds)
    resp.raise_for_status()
    return resp.json()


def fetch_weather_current(
    latitude: float,
    longitude: float,
    *,
    api_key: str | None = None,
    units: str = "metric",
    api_url: str | None = None,
    timeout: float | None = None,
) -> CurrentWeather:
    """Fetch the current conditions for the given coordinates."""
    data = CurrentWeatherResponse.model_validate(
        _get("weather", latitude, longitude, api_key=api_key, units=units, api_url=api_url, timeout=timeout)
    )
    return CurrentWeather(
        temp=data.main.temp,
        feels_like=data.main.feels_like,
        temp_min=data.main.temp_min,
        temp_max=data.main.temp_max,
        humidity=data.main.humidity,
        pressure=data.main.pressure,
        wind_speed=data.wind.speed,
        wind_deg=data.wind.deg,
        weather=_conditions(data.weather),
        dt=data.dt,
    )


def fetch_forecast_samples(
    latitude: float,
    longitude: float,
    *,
    api_key: str | None = None,
    units: str = "metric",
    api_url: str | None = None,
    timeout: float | None = None,
) -> List[ForecastSample]:
    """Fetch the 5-day / 3-hour forecast as a flat list of samples."""
    data = ForecastResponse.model_validate(
        _get("forecast", latitude, longitude, api_key=api_key, units=units, api_url=api_url, timeout=timeout)
    )

    out: List[ForecastSample] = []
    for entry in data.entries:
        out.append(
            ForecastSample(
                dt=entry.dt,
                temp=entry.main.temp,
                humidity=entry.main.humidity,
                pressure=entry.main.pressure,
                weather=_conditions(entry.weather),
                wind_speed=entry.wind.speed,
                wind_deg=entry.wind.deg,
                pop=entry.pop,
                clouds=entry.clouds.all,
            )
        )
    return out
