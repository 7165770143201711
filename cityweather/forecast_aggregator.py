"""Reshape 3-hourly forecast samples into per-day aggregates."""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from statistics import fmean
from typing import Dict, Iterable, List, Tuple

from cityweather.domain import (
    DayFeelsLike,
    DayTemperatures,
    ForecastDay,
    ForecastSample,
    WeatherCondition,
)
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="forecast_aggregator")

MAX_FORECAST_DAYS = 5
MIDDAY_HOURS = range(10, 15)  # 10..14 inclusive


@dataclass
class _DayBucket:
    """Samples collected for one UTC calendar day."""
    dt: int
    weather: Tuple[WeatherCondition, ...]
    wind_speed: float
    wind_deg: float
    pop: float
    clouds: float
    temps: List[float] = field(default_factory=list)
    humidity: List[float] = field(default_factory=list)
    pressure: List[float] = field(default_factory=list)

    @classmethod
    def seed(cls, sample: ForecastSample) -> "_DayBucket":
        return cls(
            dt=sample.dt,
            weather=sample.weather,
            wind_speed=sample.wind_speed,
            wind_deg=sample.wind_deg,
            pop=sample.pop,
            clouds=sample.clouds,
        )

    def add(self, sample: ForecastSample, hour: int) -> None:
        self.temps.append(sample.temp)
        self.humidity.append(sample.humidity)
        self.pressure.append(sample.pressure)
        if hour in MIDDAY_HOURS:
            self.weather = sample.weather

    def to_forecast_day(self) -> ForecastDay:
        temps = self.temps
        return ForecastDay(
            dt=self.dt,
            temp=DayTemperatures(
                day=fmean(temps),
                min=min(temps),
                max=max(temps),
                night=temps[-1],
                eve=temps[-2] if len(temps) >= 2 else temps[0],
                morn=temps[0],
            ),
            feels_like=DayFeelsLike(),
            pressure=fmean(self.pressure),
            humidity=fmean(self.humidity),
            weather=self.weather,
            wind_speed=self.wind_speed,
            wind_deg=self.wind_deg,
            clouds=self.clouds,
            pop=self.pop,
        )


def _utc_date(timestamp: int) -> dt.date:
    return dt.datetime.fromtimestamp(timestamp, tz=dt.timezone.utc).date()


def group_forecast_by_day(
    samples: Iterable[ForecastSample],
    *,
    max_days: int = MAX_FORECAST_DAYS,
    local_tz: dt.tzinfo = dt.timezone.utc,
) -> List[ForecastDay]:
    """
    Group forecast samples by UTC calendar day and aggregate each day.

    The first sample of a day seeds the representative condition, wind,
    precipitation probability and cloud cover. Temperature, humidity and
    pressure are averaged over every sample of the day. A sample whose hour in
    `local_tz` falls within 10:00-14:59 replaces the representative condition,
    so the displayed icon favours midday over night readings; the last such
    sample wins.

    Sunrise, sunset and feels-like values cannot be derived from these samples
    and are left as None.

    Returns at most `max_days` days, ordered by date ascending.
    """
    buckets: Dict[dt.date, _DayBucket] = {}
    for sample in samples:
        key = _utc_date(sample.dt)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = buckets[key] = _DayBucket.seed(sample)
        hour = dt.datetime.fromtimestamp(sample.dt, tz=local_tz).hour
        bucket.add(sample, hour)

    days = [buckets[key].to_forecast_day() for key in sorted(buckets)]
    if len(days) > max_days:
        logger.debug("Truncating forecast", extra={"days": len(days), "max_days": max_days})
    return days[:max_days]
