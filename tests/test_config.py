import os
import unittest

from cityweather.config import Settings


class TestConfig(unittest.TestCase):
    def test_settings_defaults(self):
        previous = os.environ.pop("CITYWX_WEATHER_TTL_SECONDS", None)
        try:
            s = Settings()
            self.assertEqual(s.weather_ttl_seconds, 1800)
            self.assertEqual(s.forecast_days, 5)
            self.assertEqual(s.page_size, 20)
            self.assertEqual(s.search_page_size, 10)
            self.assertEqual(s.city_dataset, "geonames-all-cities-with-a-population-1000")
        finally:
            if previous is not None:
                os.environ["CITYWX_WEATHER_TTL_SECONDS"] = previous

    def test_settings_env_override(self):
        previous = os.environ.get("CITYWX_WEATHER_API_URL")
        try:
            os.environ["CITYWX_WEATHER_API_URL"] = "http://example.com/data/2.5/"
            s = Settings()
            self.assertEqual(s.weather_api_url, "http://example.com/data/2.5")
        finally:
            if previous is None:
                os.environ.pop("CITYWX_WEATHER_API_URL", None)
            else:
                os.environ["CITYWX_WEATHER_API_URL"] = previous

    def test_api_key_from_env(self):
        previous = os.environ.get("CITYWX_WEATHER_API_KEY")
        try:
            os.environ["CITYWX_WEATHER_API_KEY"] = "secret"
            self.assertEqual(Settings().weather_api_key, "secret")
        finally:
            if previous is None:
                os.environ.pop("CITYWX_WEATHER_API_KEY", None)
            else:
                os.environ["CITYWX_WEATHER_API_KEY"] = previous


if __name__ == "__main__":
    unittest.main()
