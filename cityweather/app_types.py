"""Result wrappers and cache records used across modules."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from cityweather.domain import City, WeatherSnapshot


@dataclass(frozen=True)
class CityPage:
    """One page of cities, or an explicit failure with an empty page.

    On failure `cities` is empty and `total` is 0; check `ok` to tell "no
    results" apart from "request failed".
    """
    cities: Tuple[City, ...]
    total: int
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, error: str) -> "CityPage":
        return cls(cities=(), total=0, error=error)


@dataclass(frozen=True)
class WeatherResult:
    """A weather snapshot or the reason it could not be produced."""
    snapshot: Optional[WeatherSnapshot] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.snapshot is not None

    @classmethod
    def failed(cls, error: str) -> "WeatherResult":
        return cls(snapshot=None, error=error)


@dataclass(frozen=True)
class CachedSnapshot:
    """WeatherSnapshot payload with the time it was fetched."""
    data: WeatherSnapshot
    fetched_at: datetime
