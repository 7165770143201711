"""Current weather plus a five-day outlook per coordinate pair, cached for 30 minutes."""
from __future__ import annotations

import datetime as dt
import time
from typing import Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import requests
from pydantic import ValidationError

from cityweather.app_types import CachedSnapshot, WeatherResult
from cityweather.cache import ResponseCache
from cityweather.config import settings
from cityweather.data_sources import WeatherDataSource, build_weather_source
from cityweather.domain import City, WeatherSnapshot
from cityweather.forecast_aggregator import group_forecast_by_day
from utils.logging_utils import get_tagged_logger, redact_secrets

logger = get_tagged_logger(__name__, tag="weather_service")

FETCH_ERRORS = (requests.RequestException, ValidationError, KeyError, TypeError, ValueError)


def city_timezone(city: City) -> dt.tzinfo:
    """The city's IANA zone, or UTC when it is blank or unknown."""
    if not city.timezone:
        return dt.timezone.utc
    try:
        return ZoneInfo(city.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone, using UTC", extra={"timezone": city.timezone})
        return dt.timezone.utc


class WeatherClient:
    """
    Fetch and cache weather snapshots.

    The cache key is the exact (lat, lon) pair as given; coordinates that differ
    only by float noise are separate entries. Concurrent misses for the same
    key each hit the network and the last one to finish owns the cache slot.

    `clock` returns epoch seconds. It drives both the cache expiry and the
    `fetched_at` stamp of cached snapshots.
    """

    def __init__(
        self,
        data_source: WeatherDataSource | None = None,
        *,
        cache: ResponseCache | None = None,
        ttl_seconds: float | None = None,
        forecast_days: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.data_source = data_source or build_weather_source(settings)
        ttl = ttl_seconds if ttl_seconds is not None else settings.weather_ttl_seconds
        self.cache = cache if cache is not None else ResponseCache(ttl, clock=clock, name="weather")
        self.forecast_days = forecast_days or settings.forecast_days
        self._clock = clock

    def get_cached(self, latitude: float, longitude: float) -> CachedSnapshot | None:
        """Return the fresh cache entry for a coordinate pair, if any."""
        return self.cache.get((latitude, longitude))

    def get_weather(
        self,
        latitude: float,
        longitude: float,
        *,
        local_tz: dt.tzinfo = dt.timezone.utc,
    ) -> WeatherResult:
        """Return a snapshot for the coordinates, or an explicit failure.

        A stale or missing entry triggers two requests (current conditions,
        then forecast). Both must succeed; a failure leaves the cache untouched.
        `local_tz` picks the midday sample that names each day's condition.
        """
        key = (latitude, longitude)
        cached: CachedSnapshot | None = self.cache.get(key)
        if cached is not None:
            logger.debug("Weather served from cache", extra={"lat": latitude, "lon": longitude})
            return WeatherResult(snapshot=cached.data)

        logger.info("Fetching weather data", extra={"lat": latitude, "lon": longitude})
        try:
            current = self.data_source.fetch_weather_current(latitude, longitude)
            logger.debug("Current weather fetched")
            samples = self.data_source.fetch_forecast_samples(latitude, longitude)
            logger.debug("Forecast fetched", extra={"samples": len(samples)})
            forecast = group_forecast_by_day(samples, max_days=self.forecast_days, local_tz=local_tz)
        except FETCH_ERRORS as exc:
            message = redact_secrets(str(exc))
            logger.error("Error fetching weather data: %s", message,
                         extra={"lat": latitude, "lon": longitude})
            return WeatherResult.failed(message)

        snapshot = WeatherSnapshot(current=current, forecast=tuple(forecast))
        fetched_at = dt.datetime.fromtimestamp(self._clock(), tz=dt.timezone.utc)
        self.cache.set(key, CachedSnapshot(data=snapshot, fetched_at=fetched_at))
        return WeatherResult(snapshot=snapshot)

    def get_weather_for_city(self, city: City) -> WeatherResult:
        """Weather at the city's coordinates, with midday judged in its own timezone."""
        return self.get_weather(city.latitude, city.longitude, local_tz=city_timezone(city))

    def attach_weather(self, city: City) -> City:
        """Return `city` carrying its snapshot, or unchanged when the lookup fails."""
        result = self.get_weather_for_city(city)
        return city.with_weather(result.snapshot) if result.ok else city

    def clear_cache(self) -> None:
        self.cache.clear()
