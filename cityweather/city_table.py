"""Filter, sort and paginate state for browsing the city list.

This is the state a list view keeps over a CityDirectoryClient: the rows
loaded so far, "load more" bookkeeping, the free-text search box, per-column
filters and the client-side sort of the loaded rows.
"""
from __future__ import annotations

import locale
from dataclasses import dataclass
from typing import Iterable, List, Optional

from pydantic import BaseModel

from cityweather.city_service import CityDirectoryClient
from cityweather.domain import City
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="city_table")

STRING_COLUMNS = ("name", "country", "timezone", "country_code")
NUMERIC_COLUMNS = ("population", "latitude", "longitude", "id")
SEARCHABLE_COLUMNS = ("name", "country", "timezone")
SERVER_SEARCH_MIN_LENGTH = 3


class CityFilters(BaseModel):
    """Per-column filters; empty values are inactive."""
    name: Optional[str] = None
    country: Optional[str] = None
    timezone: Optional[str] = None
    population: Optional[str] = None  # minimum population, as typed

    def min_population(self) -> Optional[int]:
        """Parsed population threshold, or None when blank or not an integer.

        Digit separators are allowed: `1,000,000` and `1_000_000` both parse.
        """
        if not self.population:
            return None
        try:
            return int(self.population.strip().replace(",", "").replace("_", ""))
        except ValueError:
            return None


@dataclass(frozen=True)
class SortState:
    column: Optional[str] = "name"
    direction: str = "asc"


def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in (haystack or "").lower()


def filter_cities(
    cities: Iterable[City],
    search_text: str = "",
    filters: CityFilters | None = None,
) -> List[City]:
    """Apply the search box and every active column filter (logical AND)."""
    filters = filters or CityFilters()
    result = list(cities)

    if search_text:
        result = [
            c for c in result
            if any(_contains(getattr(c, col), search_text) for col in SEARCHABLE_COLUMNS)
        ]

    for column in SEARCHABLE_COLUMNS:
        needle = getattr(filters, column)
        if needle:
            result = [c for c in result if _contains(getattr(c, column), needle)]

    threshold = filters.min_population()
    if threshold is not None:
        result = [c for c in result if c.population >= threshold]

    return result


def _sort_key(column: str):
    if column in STRING_COLUMNS:
        return lambda c: locale.strxfrm((getattr(c, column) or "").casefold())
    if column in NUMERIC_COLUMNS:
        return lambda c: getattr(c, column) or 0
    raise ValueError(f"Cannot sort by '{column}'")


def sort_cities(cities: Iterable[City], column: str, direction: str = "asc") -> List[City]:
    """Stable sort of `cities` by `column`.

    String columns use locale-aware collation, numeric columns numeric order.
    Ties keep their input order in both directions.
    """
    return sorted(cities, key=_sort_key(column), reverse=direction.lower() == "desc")


def next_sort_state(current: SortState, column: str) -> SortState:
    """Clicking the active ascending column flips it; anything else sorts ascending."""
    if current.column == column and current.direction == "asc":
        return SortState(column=column, direction="desc")
    return SortState(column=column, direction="asc")


class CityBrowser:
    """Paginated city list with search, filters and client-side sort.

    Pages start at `offset` and advance by `page_size`.
    """

    def __init__(
        self,
        client: CityDirectoryClient,
        *,
        page_size: int | None = None,
        offset: int = 0,
    ) -> None:
        self.client = client
        self.page_size = page_size or client.page_size
        self.offset = offset
        self.rows: List[City] = []
        self.total = 0
        self.page = 0
        self.has_more = True
        self.search_text = ""
        self.sort = SortState()
        self.filters = CityFilters()
        self.last_error: Optional[str] = None
        self._client_sorted = False

    def _query(self, offset: int):
        return self.client.query(
            offset,
            self.page_size,
            self.search_text,
            self.sort.column or "name",
            self.sort.direction,
        )

    def _next_offset(self) -> int:
        return self.offset + self.page * self.page_size

    def load_first_page(self) -> bool:
        """Replace the loaded rows with the first page. Returns False on failure."""
        page = self._query(self.offset)
        if not page.ok:
            self.last_error = page.error
            logger.warning("Failed to load cities", extra={"error": page.error})
            return False

        self.last_error = None
        self.rows = list(page.cities)
        self.total = page.total
        self.page = 1
        self.has_more = self.offset + len(self.rows) < self.total
        return True

    def load_more(self) -> bool:
        """Append the next page when more rows are available."""
        if not self.has_more:
            return False

        page = self._query(self._next_offset())
        if not page.ok:
            self.last_error = page.error
            logger.warning("Failed to load more cities", extra={"error": page.error})
            return False

        self.last_error = None
        self.rows.extend(page.cities)
        self.page += 1
        self.has_more = self._next_offset() < self.total
        return True

    def search(self, text: str) -> None:
        """Update the search box; requery the server for 3+ characters or when cleared."""
        self.search_text = text
        if len(text) >= SERVER_SEARCH_MIN_LENGTH or not text:
            self.load_first_page()

    def set_filters(self, filters: CityFilters) -> None:
        self.filters = filters

    def toggle_sort(self, column: str) -> SortState:
        """Re-sort the loaded rows by `column`, flipping direction on repeat."""
        if column not in STRING_COLUMNS + NUMERIC_COLUMNS:
            raise ValueError(f"Cannot sort by '{column}'")
        self.sort = next_sort_state(self.sort, column)
        self._client_sorted = True
        return self.sort

    def visible(self) -> List[City]:
        """Rows after search, filters and (when requested) client-side sort."""
        rows = filter_cities(self.rows, self.search_text, self.filters)
        if self._client_sorted and self.sort.column:
            rows = sort_cities(rows, self.sort.column, self.sort.direction)
        return rows
