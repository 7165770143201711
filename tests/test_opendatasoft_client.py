import unittest

from cityweather.data_sources import opendatasoft_client


class DummyResp:
    def __init__(self, payload):
        self._payload = payload

    def raise_for_status(self):
        pass

    def json(self):
        return self._payload


def _record(geoname_id, name, population=None, timezone="Asia/Kolkata"):
    return {
        "datasetid": "geonames-all-cities-with-a-population-1000",
        "recordid": f"r{geoname_id}",
        "fields": {
            "geoname_id": geoname_id,
            "name": name,
            "cou_name_en": "India",
            "coordinates": [18.52, 73.86],
            "population": population,
            "timezone_str": timezone,
            "feature_code": "PPLA2",
        },
    }


def _make_payload():
    return {
        "nhits": 1234,
        "records": [_record(1259229, "Pune", 3124458), _record(1, "Nowhere", None, None)],
    }


class TestOpenDataSoftClient(unittest.TestCase):
    def setUp(self):
        self._orig_session = opendatasoft_client.session
        self.calls = []
        calls = self.calls

        def fake_get(url, params=None, timeout=None):
            calls.append((url, params))
            return DummyResp(_make_payload())

        opendatasoft_client.session = type("S", (), {"get": staticmethod(fake_get)})()

    def tearDown(self):
        opendatasoft_client.session = self._orig_session

    def test_fetch_cities_converts_records(self):
        cities, total = opendatasoft_client.fetch_cities(0, 20)
        self.assertEqual(total, 1234)
        self.assertEqual(len(cities), 2)
        pune = cities[0]
        self.assertEqual(pune.id, 1259229)
        self.assertEqual(pune.country, "India")
        self.assertEqual((pune.latitude, pune.longitude), (18.52, 73.86))
        self.assertEqual(pune.population, 3124458)
        self.assertEqual(pune.country_code, "")
        self.assertIsNone(pune.weather)

    def test_missing_optional_fields_default(self):
        cities, _ = opendatasoft_client.fetch_cities()
        self.assertEqual(cities[1].population, 0)
        self.assertEqual(cities[1].timezone, "")

    def test_request_params(self):
        opendatasoft_client.fetch_cities(40, 20, query="pune", sort_column="population", sort_direction="desc")
        _, params = self.calls[0]
        self.assertEqual(params["start"], 40)
        self.assertEqual(params["rows"], 20)
        self.assertEqual(params["sort"], "-population")
        self.assertEqual(params["q"], "pune")
        self.assertEqual(params["format"], "json")
        self.assertEqual(params["timezone"], "UTC")
        self.assertEqual(params["dataset"], "geonames-all-cities-with-a-population-1000")

    def test_empty_query_is_omitted(self):
        opendatasoft_client.fetch_cities(0, 20)
        _, params = self.calls[0]
        self.assertNotIn("q", params)
        self.assertEqual(params["sort"], "name")

    def test_build_sort_param_rejects_unknown_direction(self):
        with self.assertRaises(ValueError):
            opendatasoft_client.build_sort_param("name", "sideways")


if __name__ == "__main__":
    unittest.main()
