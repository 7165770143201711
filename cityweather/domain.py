"""Domain types shared by the city and weather clients.

All types are frozen dataclasses: a value fetched from upstream, or stored in
a cache, is never mutated afterwards. Fields that the data source cannot
provide are ``None`` rather than zero so callers can tell "unavailable" from a
real reading.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class WeatherCondition:
    """A single weather condition (id, category, description, icon code)."""
    id: int
    main: str
    description: str
    icon: str


@dataclass(frozen=True)
class CurrentWeather:
    """Instantaneous reading for a coordinate pair."""
    temp: float
    feels_like: Optional[float]
    temp_min: Optional[float]
    temp_max: Optional[float]
    humidity: float
    pressure: float
    wind_speed: float
    wind_deg: float
    weather: Tuple[WeatherCondition, ...]
    dt: int  # UTC epoch seconds


@dataclass(frozen=True)
class ForecastSample:
    """One raw 3-hour forecast entry."""
    dt: int  # UTC epoch seconds
    temp: float
    humidity: float
    pressure: float
    weather: Tuple[WeatherCondition, ...]
    wind_speed: float
    wind_deg: float
    pop: float
    clouds: float


@dataclass(frozen=True)
class DayTemperatures:
    day: float
    min: float
    max: float
    night: float
    eve: float
    morn: float


@dataclass(frozen=True)
class DayFeelsLike:
    """Per-part-of-day apparent temperature; not derivable from 3-hour samples."""
    day: Optional[float] = None
    night: Optional[float] = None
    eve: Optional[float] = None
    morn: Optional[float] = None


@dataclass(frozen=True)
class ForecastDay:
    """One calendar day aggregated from several forecast samples."""
    dt: int
    temp: DayTemperatures
    pressure: float
    humidity: float
    weather: Tuple[WeatherCondition, ...]
    wind_speed: float
    wind_deg: float
    clouds: float
    pop: float
    feels_like: DayFeelsLike = field(default_factory=DayFeelsLike)
    sunrise: Optional[int] = None
    sunset: Optional[int] = None


@dataclass(frozen=True)
class WeatherSnapshot:
    """Current conditions plus up to five forecast days for one location."""
    current: CurrentWeather
    forecast: Tuple[ForecastDay, ...]


@dataclass(frozen=True)
class City:
    """A city from the geonames directory."""
    id: int
    name: str
    country: str
    timezone: str
    latitude: float
    longitude: float
    population: int
    country_code: str = ""  # not provided by the dataset
    weather: Optional[WeatherSnapshot] = None

    def with_weather(self, snapshot: Optional[WeatherSnapshot]) -> "City":
        """Return a copy of this city carrying `snapshot`."""
        return replace(self, weather=snapshot)
