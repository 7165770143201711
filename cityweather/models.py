"""Pydantic schemas for the raw JSON returned by the external APIs.

Only the fields the clients read are declared; everything else the APIs send
is ignored. A response that does not fit these shapes raises
``pydantic.ValidationError``, which the clients treat as a malformed response.
"""

from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class _ApiModel(BaseModel):
    """Base model that tolerates extra keys from upstream payloads."""

    model_config = ConfigDict(extra="ignore")


# ---------------------------------------------------------------------------
# OpenDataSoft city records
# ---------------------------------------------------------------------------

class CityRecordFields(_ApiModel):
    """`fields` object of one geonames record."""
    geoname_id: int
    name: str
    cou_name_en: str | None = None
    coordinates: Tuple[float, float]
    population: int | None = None
    timezone_str: str | None = None


class CityRecord(_ApiModel):
    """One entry of the `records` array."""
    recordid: str | None = None
    fields: CityRecordFields


class CitySearchResponse(_ApiModel):
    """Top-level search response."""
    nhits: int = 0
    records: List[CityRecord] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# OpenWeatherMap current conditions and forecast
# ---------------------------------------------------------------------------

class ConditionPayload(_ApiModel):
    """Weather condition object (`weather[]` entry)."""
    id: int
    main: str
    description: str
    icon: str


class MainPayload(_ApiModel):
    """`main` block shared by current and forecast responses."""
    temp: float
    feels_like: float | None = None
    temp_min: float | None = None
    temp_max: float | None = None
    pressure: float
    humidity: float


class WindPayload(_ApiModel):
    speed: float = 0.0
    deg: float = 0.0
    gust: float | None = None


class CloudsPayload(_ApiModel):
    all: float = 0.0


class CurrentWeatherResponse(_ApiModel):
    """Response of the `/weather` endpoint."""
    dt: int
    main: MainPayload
    weather: List[ConditionPayload] = Field(default_factory=list)
    wind: WindPayload = Field(default_factory=WindPayload)
    clouds: CloudsPayload = Field(default_factory=CloudsPayload)
    name: str | None = None


class ForecastEntry(_ApiModel):
    """One 3-hour entry of the `/forecast` response."""
    dt: int
    main: MainPayload
    weather: List[ConditionPayload] = Field(default_factory=list)
    wind: WindPayload = Field(default_factory=WindPayload)
    clouds: CloudsPayload = Field(default_factory=CloudsPayload)
    pop: float = 0.0
    dt_txt: str | None = None


class ForecastResponse(_ApiModel):
    """Response of the `/forecast` endpoint."""
    cnt: int | None = None
    entries: List[ForecastEntry] = Field(default_factory=list, alias="list")
