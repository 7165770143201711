"""Helpers for querying the OpenDataSoft geonames city dataset."""
from __future__ import annotations

from typing import List

import requests

from cityweather.config import settings
from cityweather.domain import City
from cityweather.models import CityRecord, CitySearchResponse
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="opendatasoft_client")

session = requests.Session()

SORT_DIRECTIONS = ("asc", "desc")


def build_sort_param(column: str, direction: str) -> str:
    """Return the dataset sort spec: `column` or `-column` for descending."""
    direction = direction.lower()
    if direction not in SORT_DIRECTIONS:
        raise ValueError(f"Unknown sort direction '{direction}'")
    return column if direction == "asc" else f"-{column}"


def record_to_city(record: CityRecord) -> City:
    """Convert one geonames record into a City."""
    fields = record.fields
    latitude, longitude = fields.coordinates
    return City(
        id=fields.geoname_id,
        name=fields.name,
        country=fields.cou_name_en or "",
        timezone=fields.timezone_str or "",
        latitude=latitude,
        longitude=longitude,
        population=fields.population or 0,
    )


def fetch_cities(
    start: int = 0,
    rows: int = 20,
    *,
    query: str = "",
    sort_column: str = "name",
    sort_direction: str = "asc",
    api_url: str | None = None,
    dataset: str | None = None,
    timeout: float | None = None,
) -> tuple[List[City], int]:
    """Fetch one page of cities and the total hit count.

    Raises requests.RequestException on transport or HTTP status failures and
    pydantic.ValidationError when the payload does not look like a search
    response.
    """
    params = {
        "dataset": dataset or settings.city_dataset,
        "rows": rows,
        "start": start,
        "sort": build_sort_param(sort_column, sort_direction),
        "format": "json",
        "timezone": "UTC",
    }
    if query:
        params["q"] = query

    url = f"{api_url or settings.city_api_url}/"
    logger.debug("Requesting city page", extra={"params": params})
    resp = session.get(url, params=params, timeout=timeout or settings.request_timeout_seconds)
    resp.raise_for_status()
    data = CitySearchResponse.model_validate(resp.json())

    cities = [record_to_city(r) for r in data.records]
    return cities, data.nhits
