"""Formatting helpers that turn domain values into display strings."""
from __future__ import annotations

import datetime as dt
import math
from typing import Optional

from cityweather.domain import CurrentWeather, ForecastDay, WeatherSnapshot

ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}@2x.png"

# First match wins, checked in order.
_BACKGROUND_RULES = (
    (("clear",), "bg-sunny"),
    (("cloud",), "bg-cloudy"),
    (("rain", "drizzle"), "bg-rainy"),
    (("thunder", "storm"), "bg-stormy"),
    (("snow",), "bg-snowy"),
)
DEFAULT_BACKGROUND = "bg-cloudy"


def weather_icon_url(icon: str) -> str:
    return ICON_URL_TEMPLATE.format(icon=icon)


def weather_background_class(condition: str) -> str:
    """Map a condition name ("Clear", "light rain", ...) to a background class."""
    lowered = (condition or "").lower()
    for needles, css_class in _BACKGROUND_RULES:
        if any(n in lowered for n in needles):
            return css_class
    return DEFAULT_BACKGROUND


def format_temperature(temp: Optional[float]) -> str:
    """Round half up to whole degrees Celsius; empty for missing values."""
    if temp is None:
        return ""
    return f"{math.floor(temp + 0.5)}°C"


def _to_datetime(timestamp: int, tz: dt.tzinfo) -> dt.datetime:
    return dt.datetime.fromtimestamp(timestamp, tz=tz)


def format_date(timestamp: int, tz: dt.tzinfo = dt.timezone.utc) -> str:
    """e.g. ``Mon, Jan 1``."""
    d = _to_datetime(timestamp, tz)
    return f"{d:%a}, {d:%b} {d.day}"


def format_time(timestamp: int, tz: dt.tzinfo = dt.timezone.utc) -> str:
    """e.g. ``01:00 PM``."""
    return _to_datetime(timestamp, tz).strftime("%I:%M %p")


def _fmt(val, unit: str, fmt: str) -> str:
    """Format a value/unit pair or return an empty string."""
    if val is None:
        return ""
    return f"{fmt.format(val)}{unit}"


def current_to_display_strings(current: CurrentWeather) -> dict:
    condition = current.weather[0] if current.weather else None
    return {
        "time": format_time(current.dt),
        "temperature": format_temperature(current.temp),
        "feels_like": format_temperature(current.feels_like),
        "humidity": _fmt(current.humidity, "%", "{:.0f}"),
        "pressure": _fmt(current.pressure, " hPa", "{:.0f}"),
        "wind": _fmt(current.wind_speed, " m/s", "{:.1f}"),
        "wind_direction": _fmt(current.wind_deg, "°", "{:.0f}"),
        "condition": condition.description if condition else "",
        "icon_url": weather_icon_url(condition.icon) if condition else "",
        "background": weather_background_class(condition.main if condition else ""),
    }


def forecast_day_to_display_strings(day: ForecastDay) -> dict:
    condition = day.weather[0] if day.weather else None
    return {
        "date": format_date(day.dt),
        "temperature": format_temperature(day.temp.day),
        "low": format_temperature(day.temp.min),
        "high": format_temperature(day.temp.max),
        "humidity": _fmt(day.humidity, "%", "{:.0f}"),
        "precipitation_prob": _fmt(day.pop * 100 if day.pop is not None else None, "%", "{:.0f}"),
        "condition": condition.description if condition else "",
        "icon_url": weather_icon_url(condition.icon) if condition else "",
    }


def snapshot_to_display_strings(snapshot: WeatherSnapshot) -> dict:
    """Return a display-friendly dict for the CLI."""
    return {
        "current": current_to_display_strings(snapshot.current),
        "forecast": [forecast_day_to_display_strings(d) for d in snapshot.forecast],
    }
