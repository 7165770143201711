import unittest

import requests
from pydantic import ValidationError

from cityweather.data_sources import openweather_client


class DummyResp:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code != 200:
            raise requests.HTTPError(f"{self.status_code} Client Error")

    def json(self):
        return self._payload


def _condition(main="Clouds", icon="03d"):
    return {"id": 802, "main": main, "description": "scattered clouds", "icon": icon}


def _make_current_payload():
    return {
        "coord": {"lon": 73.86, "lat": 18.52},
        "weather": [_condition()],
        "main": {
            "temp": 27.5,
            "feels_like": 28.1,
            "temp_min": 26.0,
            "temp_max": 29.0,
            "pressure": 1010,
            "humidity": 60,
        },
        "wind": {"speed": 3.6, "deg": 270},
        "clouds": {"all": 40},
        "dt": 1704110400,
        "name": "Pune",
        "cod": 200,
    }


def _make_forecast_payload():
    return {
        "cod": "200",
        "cnt": 2,
        "list": [
            {
                "dt": 1704110400,
                "main": {"temp": 20.0, "pressure": 1012, "humidity": 50},
                "weather": [_condition("Clear", "01d")],
                "clouds": {"all": 5},
                "wind": {"speed": 2.0, "deg": 90, "gust": 3.0},
                "pop": 0.1,
                "dt_txt": "2024-01-01 12:00:00",
            },
            {
                "dt": 1704121200,
                "main": {"temp": 18.0, "pressure": 1013, "humidity": 55},
                "weather": [_condition("Rain", "10n")],
                "clouds": {"all": 80},
                "wind": {"speed": 4.0, "deg": 100},
                "pop": 0.6,
                "dt_txt": "2024-01-01 15:00:00",
            },
        ],
    }


class TestOpenWeatherClient(unittest.TestCase):
    def setUp(self):
        self._orig_session = openweather_client.session
        self.calls = []

    def tearDown(self):
        openweather_client.session = self._orig_session

    def _install(self, resp):
        calls = self.calls

        def fake_get(url, params=None, timeout=None):
            calls.append((url, params))
            return resp

        openweather_client.session = type("S", (), {"get": staticmethod(fake_get)})()

    def test_fetch_weather_current(self):
        self._install(DummyResp(_make_current_payload()))

        current = openweather_client.fetch_weather_current(18.52, 73.86, api_key="k")
        self.assertEqual(current.temp, 27.5)
        self.assertEqual(current.wind_speed, 3.6)
        self.assertEqual(current.weather[0].icon, "03d")
        self.assertEqual(current.dt, 1704110400)

        url, params = self.calls[0]
        self.assertTrue(url.endswith("/weather"))
        self.assertEqual(params["appid"], "k")
        self.assertEqual(params["units"], "metric")
        self.assertEqual((params["lat"], params["lon"]), (18.52, 73.86))

    def test_fetch_forecast_samples(self):
        self._install(DummyResp(_make_forecast_payload()))

        samples = openweather_client.fetch_forecast_samples(0, 0, api_key="k")
        self.assertEqual(len(samples), 2)
        self.assertEqual(samples[1].temp, 18.0)
        self.assertEqual(samples[1].pop, 0.6)
        self.assertEqual(samples[0].clouds, 5)
        self.assertTrue(self.calls[0][0].endswith("/forecast"))

    def test_http_error_propagates(self):
        self._install(DummyResp({}, status_code=401))
        with self.assertRaises(requests.HTTPError):
            openweather_client.fetch_weather_current(0, 0, api_key="bad")

    def test_malformed_payload_raises_validation_error(self):
        self._install(DummyResp({"weather": []}))
        with self.assertRaises(ValidationError):
            openweather_client.fetch_weather_current(0, 0, api_key="k")


if __name__ == "__main__":
    unittest.main()
