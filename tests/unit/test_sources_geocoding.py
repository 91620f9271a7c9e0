"""
Unit tests for the OpenCage geocoding adapter.
"""

from unittest.mock import MagicMock, patch

import requests

from firm_research.sources.base import GeocodeResult, LookupFailure
from firm_research.sources.geocoding import OpenCageGeocoder, parse_geocode

MCLEAN = {
    "components": {
        "town": "McLean",
        "state": "Virginia",
        "state_code": "VA",
        "country_code": "us",
    },
    "formatted": "McLean, VA, United States of America",
    "confidence": 7,
}


def _session(payload=None, status_code=200):
    mock_session = MagicMock()
    mock_response = MagicMock()
    mock_response.status_code = status_code
    mock_response.json.return_value = payload or {}
    mock_session.get.return_value = mock_response
    return mock_session


class TestParseGeocode:
    def test_town_and_state_code(self):
        result = parse_geocode(MCLEAN)
        assert result == GeocodeResult("McLean", "VA", "US", "McLean, VA, United States of America", 7)

    def test_state_name_when_no_code(self):
        raw = {"components": {"city": "Madrid", "state": "Community of Madrid", "country_code": "es"}}
        assert parse_geocode(raw).region == "Community of Madrid"

    def test_no_locality(self):
        assert parse_geocode({"components": {"country_code": "us"}, "confidence": 1}) is None


class TestOpenCageGeocoder:
    """Tests for OpenCageGeocoder.validate."""

    @patch("firm_research.sources.geocoding._rate_limiter")
    def test_valid(self, mock_rate_limiter):
        session = _session({"results": [MCLEAN]})
        geocoder = OpenCageGeocoder(session, "test-key")

        result = geocoder.validate("Mclean", "VA", "US")

        assert (result.city, result.region, result.country, result.confidence) == (
            "McLean",
            "VA",
            "US",
            7,
        )
        params = session.get.call_args.kwargs["params"]
        assert params["q"] == "Mclean, VA, US"
        assert params["countrycode"] == "us"
        mock_rate_limiter.assert_called_once()

    @patch("firm_research.sources.geocoding._rate_limiter")
    def test_no_results(self, mock_rate_limiter):
        result = OpenCageGeocoder(_session({"results": []}), "k").validate("Nowhere", "", "US")
        assert isinstance(result, LookupFailure)
        assert "no match" in result.reason

    @patch("firm_research.sources.geocoding._rate_limiter")
    def test_http_error(self, mock_rate_limiter):
        result = OpenCageGeocoder(_session(status_code=402), "k").validate("McLean", "VA", "US")
        assert isinstance(result, LookupFailure)
        assert result.reason == "HTTP 402"

    @patch("firm_research.sources.geocoding._rate_limiter")
    def test_timeout(self, mock_rate_limiter):
        session = MagicMock()
        session.get.side_effect = requests.Timeout()
        result = OpenCageGeocoder(session, "k").validate("McLean", "VA", "US")
        assert isinstance(result, LookupFailure)
        assert result.timed_out

    def test_no_api_key(self):
        session = MagicMock()
        result = OpenCageGeocoder(session, "").validate("McLean", "VA", "US")
        assert isinstance(result, LookupFailure)
        session.get.assert_not_called()

    @patch("firm_research.sources.geocoding._rate_limiter")
    def test_cache_round_trip(self, mock_rate_limiter):
        cache = MagicMock()
        cache.get.return_value = None
        geocoder = OpenCageGeocoder(_session({"results": [MCLEAN]}), "k", cache=cache)

        geocoder.validate("McLean", "VA", "US")

        namespace, key, value = cache.set.call_args.args
        assert (namespace, key) == ("geocode", "McLean, VA, US")
        assert value["city"] == "McLean"

        cache.get.return_value = value
        session = MagicMock()
        cached = OpenCageGeocoder(session, "k", cache=cache).validate("McLean", "VA", "US")
        assert cached.city == "McLean"
        session.get.assert_not_called()
