"""Terminal front end: list and search cities, show weather for a location."""

import argparse
from typing import Iterable, List, Optional

from cityweather.city_service import CityDirectoryClient
from cityweather.city_table import CityBrowser, CityFilters, SortState
from cityweather.config import settings
from cityweather.display import snapshot_to_display_strings
from cityweather.domain import City
from cityweather.weather_service import WeatherClient
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="cli")


def _format_city_rows(cities: Iterable[City]) -> str:
    lines = [f"{'Name':<30} {'Country':<20} {'Timezone':<25} {'Population':>12}"]
    for c in cities:
        lines.append(f"{c.name[:30]:<30} {c.country[:20]:<20} {c.timezone[:25]:<25} {c.population:>12,}")
    return "\n".join(lines)


def _format_weather(display: dict) -> str:
    cur = display["current"]
    lines = [
        f"Now: {cur['temperature']} (feels like {cur['feels_like']}), {cur['condition']}",
        f"     humidity {cur['humidity']}, pressure {cur['pressure']}, wind {cur['wind']} {cur['wind_direction']}",
        "",
        "Forecast:",
    ]
    for day in display["forecast"]:
        lines.append(
            f"  {day['date']:<12} {day['temperature']:>6}  "
            f"low {day['low']:>6}  high {day['high']:>6}  "
            f"rain {day['precipitation_prob']:>4}  {day['condition']}"
        )
    return "\n".join(lines)


def cmd_list(args: argparse.Namespace, client: CityDirectoryClient) -> int:
    browser = CityBrowser(client, page_size=args.limit, offset=args.offset)
    browser.search_text = args.search or ""
    browser.sort = SortState(column=args.sort, direction="desc" if args.desc else "asc")
    if not browser.load_first_page():
        logger.error("Failed to load cities. Please try again.")
        return 1
    for _ in range(args.pages - 1):
        if not browser.load_more():
            break

    browser.set_filters(CityFilters(
        name=args.name,
        country=args.country,
        timezone=args.timezone,
        population=args.min_population,
    ))
    rows = browser.visible()
    print(_format_city_rows(rows))
    print(f"\n{len(rows)} shown, {len(browser.rows)} loaded, {browser.total:,} total")
    return 0


def cmd_search(args: argparse.Namespace, client: CityDirectoryClient) -> int:
    if len(args.text) < 2:
        logger.error("Search query too short: enter at least 2 characters")
        return 1
    cities = client.search_by_name(args.text)
    if not cities:
        print("No cities found")
        return 0
    for c in cities:
        print(f"{c.name}, {c.country}  ({c.timezone})  {c.latitude:.4f}, {c.longitude:.4f}")
    return 0


def cmd_weather(args: argparse.Namespace, client: WeatherClient) -> int:
    result = client.get_weather(args.lat, args.lon)
    if not result.ok:
        logger.error("Failed to load weather data. Please try again.")
        return 1
    print(_format_weather(snapshot_to_display_strings(result.snapshot)))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cityweather", description=__doc__)
    parser.add_argument("--log-level", default=settings.log_level)
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="show one page of cities")
    p_list.add_argument("--offset", type=int, default=0, help="index of the first city to show")
    p_list.add_argument("--pages", type=int, default=1, help="number of pages to load")
    p_list.add_argument("--limit", type=int, default=settings.page_size)
    p_list.add_argument("--search", default="")
    p_list.add_argument("--sort", default="name")
    p_list.add_argument("--desc", action="store_true")
    p_list.add_argument("--name")
    p_list.add_argument("--country")
    p_list.add_argument("--timezone")
    p_list.add_argument("--min-population")

    p_search = sub.add_parser("search", help="find cities by name")
    p_search.add_argument("text")

    p_weather = sub.add_parser("weather", help="current weather and 5-day forecast")
    p_weather.add_argument("lat", type=float)
    p_weather.add_argument("lon", type=float)
    return parser


def main(
    argv: Optional[List[str]] = None,
    *,
    city_client: Optional[CityDirectoryClient] = None,
    weather_client: Optional[WeatherClient] = None,
) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level.upper(), job_name="cityweather")

    if args.command == "weather":
        return cmd_weather(args, weather_client or WeatherClient())

    city_client = city_client or CityDirectoryClient()
    if args.command == "list":
        return cmd_list(args, city_client)
    return cmd_search(args, city_client)
