import contextlib
import io
import unittest

import requests

from cityweather import cli
from cityweather.cache import ResponseCache
from cityweather.city_service import CityDirectoryClient
from cityweather.data_sources import CallableCityDataSource, CallableWeatherDataSource
from cityweather.weather_service import WeatherClient

from _fixtures import make_city, make_current, samples_for_days


def _city_client(error=None, calls=None):
    cities = [make_city(1, "Pune", population=3_000_000), make_city(2, "Pune Rural", population=50_000)]

    def fetch(start=0, rows=20, *, query="", sort_column="name", sort_direction="asc"):
        if calls is not None:
            calls.append((start, rows))
        if error is not None:
            raise error
        return cities[start:start + rows], len(cities)

    return CityDirectoryClient(CallableCityDataSource(cities=fetch))


def _weather_client(error=None):
    def current(lat, lon):
        if error is not None:
            raise error
        return make_current()

    return WeatherClient(
        CallableWeatherDataSource(weather_current=current, forecast_samples=lambda lat, lon: samples_for_days(1, 5)),
        cache=ResponseCache(60),
    )


def _run(argv, **clients):
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        code = cli.main(["--log-level", "WARNING", *argv], **clients)
    return code, out.getvalue()


class TestCli(unittest.TestCase):
    def test_list_applies_filters(self):
        code, out = _run(["list", "--name", "pune", "--min-population", "1000000"], city_client=_city_client())
        self.assertEqual(code, 0)
        self.assertIn("Pune", out)
        self.assertNotIn("Pune Rural", out)
        self.assertIn("1 shown, 2 loaded", out)

    def test_list_offset_starts_first_query(self):
        calls = []
        code, out = _run(["list", "--offset", "1", "--limit", "5"], city_client=_city_client(calls=calls))
        self.assertEqual(code, 0)
        self.assertEqual(calls, [(1, 5)])
        self.assertIn("Pune Rural", out)
        self.assertIn("1 shown, 1 loaded, 2 total", out)

    def test_list_pages_loads_following_pages(self):
        calls = []
        code, out = _run(["list", "--limit", "1", "--pages", "3"], city_client=_city_client(calls=calls))
        self.assertEqual(code, 0)
        self.assertEqual(calls, [(0, 1), (1, 1)])
        self.assertIn("2 shown, 2 loaded, 2 total", out)

    def test_list_failure_exits_nonzero(self):
        code, _ = _run(["list"], city_client=_city_client(requests.ConnectionError("down")))
        self.assertEqual(code, 1)

    def test_search_too_short(self):
        code, _ = _run(["search", "p"], city_client=_city_client())
        self.assertEqual(code, 1)

    def test_search_prints_matches(self):
        code, out = _run(["search", "pune"], city_client=_city_client())
        self.assertEqual(code, 0)
        self.assertIn("Pune, India", out)

    def test_weather(self):
        code, out = _run(["weather", "18.52", "73.86"], weather_client=_weather_client())
        self.assertEqual(code, 0)
        self.assertIn("Now: 25°C", out)
        self.assertIn("Mon, Jan 1", out)

    def test_weather_failure(self):
        code, _ = _run(["weather", "0", "0"], weather_client=_weather_client(requests.HTTPError("401")))
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
