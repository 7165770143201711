"""Paginated, searchable access to the city directory with per-client caching."""
from __future__ import annotations

from typing import Tuple

import requests
from pydantic import ValidationError

from cityweather.app_types import CityPage
from cityweather.cache import ResponseCache
from cityweather.config import settings
from cityweather.data_sources import CityDataSource, build_city_source
from cityweather.data_sources.opendatasoft_client import SORT_DIRECTIONS
from cityweather.domain import City
from utils.logging_utils import get_tagged_logger, redact_secrets

logger = get_tagged_logger(__name__, tag="city_service")

MIN_SEARCH_LENGTH = 2
SEARCH_KEY_PREFIX = "search:"

# Transport/HTTP failures, malformed payloads.
FETCH_ERRORS = (requests.RequestException, ValidationError, KeyError, TypeError, ValueError)


class CityDirectoryClient:
    """Query the city directory, caching each page for the lifetime of the client.

    Cache hits return `total` equal to the length of the cached page rather
    than the server-side hit count, so callers paging on `total` see the end
    of the list early when a page is served from cache.
    """

    def __init__(
        self,
        data_source: CityDataSource | None = None,
        *,
        cache: ResponseCache | None = None,
        page_size: int | None = None,
        search_page_size: int | None = None,
    ) -> None:
        self.data_source = data_source or build_city_source(settings)
        self.cache = cache if cache is not None else ResponseCache(name="cities")
        self.page_size = page_size or settings.page_size
        self.search_page_size = search_page_size or settings.search_page_size

    def query(
        self,
        offset: int = 0,
        limit: int | None = None,
        search_text: str = "",
        sort_column: str = "name",
        sort_direction: str = "asc",
    ) -> CityPage:
        """Return one page of cities; never raises for network or payload errors."""
        limit = limit or self.page_size
        sort_direction = sort_direction.lower()
        if sort_direction not in SORT_DIRECTIONS:
            raise ValueError(f"Unknown sort direction '{sort_direction}'")

        key = (offset, limit, search_text, sort_column, sort_direction)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("City page served from cache", extra={"key": key})
            return CityPage(cities=cached, total=len(cached))

        try:
            cities, total = self.data_source.fetch_cities(
                offset,
                limit,
                query=search_text,
                sort_column=sort_column,
                sort_direction=sort_direction,
            )
        except FETCH_ERRORS as exc:
            message = redact_secrets(str(exc))
            logger.error("Error fetching cities: %s", message, extra={"key": key})
            return CityPage.failed(message)

        page: Tuple[City, ...] = tuple(cities)
        self.cache.set(key, page)
        logger.info("Fetched city page", extra={"count": len(page), "total": total, "offset": offset})
        return CityPage(cities=page, total=total)

    def search_by_name(self, text: str) -> Tuple[City, ...]:
        """Return up to `search_page_size` cities matching `text`.

        Inputs shorter than two characters return an empty tuple without a
        request. Results are cached under their own namespace so they never
        collide with pagination entries.
        """
        if not text or len(text) < MIN_SEARCH_LENGTH:
            return ()

        key = (SEARCH_KEY_PREFIX, text)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        page = self.query(0, self.search_page_size, text)
        if not page.ok:
            logger.warning("City search failed", extra={"text": text, "error": page.error})
            return ()

        self.cache.set(key, page.cities)
        return page.cities

    def clear_cache(self) -> None:
        self.cache.clear()
