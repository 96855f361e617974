"""
Tests for the cached Places API client.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from prolead.places import (
    AUTOCOMPLETE_URL,
    DETAILS_URL,
    NEARBY_SEARCH_URL,
    PlacesApiError,
    PlacesClient,
)


def _response(payload):
    resp = MagicMock()
    resp.json.return_value = payload
    resp.raise_for_status.return_value = None
    return resp


@pytest.fixture
def client(cache):
    return PlacesClient("test-key", cache=cache)


class TestSearchNearby:
    def test_calls_api_and_caches(self, client, cache, sample_place):
        payload = {"status": "OK", "results": [sample_place]}
        with patch("prolead.places.requests.get", return_value=_response(payload)) as mock_get:
            first = client.search_nearby(-23.56, -46.65, radius=2000, place_type="cafe")
            second = client.search_nearby(-23.56, -46.65, radius=2000, place_type="cafe")

        assert first == second == [sample_place]
        mock_get.assert_called_once()
        args, kwargs = mock_get.call_args
        assert args[0] == NEARBY_SEARCH_URL
        assert kwargs["params"] == {
            "location": "-23.56,-46.65",
            "radius": 2000,
            "type": "cafe",
            "key": "test-key",
        }
        assert cache.keys("nearby_places:") == [
            "nearby_places:lat:-23.56|lng:-46.65|radius:2000|type:cafe"
        ]

    def test_refetches_after_ttl(self, client, clock):
        payload = {"status": "OK", "results": []}
        with patch("prolead.places.requests.get", return_value=_response(payload)) as mock_get:
            client.search_nearby(1.0, 2.0)
            clock.advance(601)
            client.search_nearby(1.0, 2.0)
        assert mock_get.call_count == 2

    def test_dedupes_filters_and_truncates(self, client, sample_place):
        no_contact = {"place_id": "bare", "name": "Bare", "formatted_phone_number": "n/a"}
        results = [sample_place, sample_place, no_contact] + [
            {"place_id": f"p{i}", "website": f"https://p{i}.example.com"} for i in range(5)
        ]
        payload = {"status": "OK", "results": results}
        with patch("prolead.places.requests.get", return_value=_response(payload)):
            everything = client.search_nearby(0.0, 0.0)
            with_contact = client.search_nearby(0.0, 0.0, require_contact=True, max_results=3)

        assert len(everything) == 7
        assert [p["place_id"] for p in with_contact] == ["ChIJ-cafe-1", "p0", "p1"]

    def test_zero_results(self, client):
        with patch("prolead.places.requests.get", return_value=_response({"status": "ZERO_RESULTS"})):
            assert client.search_nearby(0.0, 0.0) == []

    def test_error_status_raises_and_is_not_cached(self, client, cache):
        payload = {"status": "REQUEST_DENIED", "error_message": "bad key"}
        with patch("prolead.places.requests.get", return_value=_response(payload)):
            with pytest.raises(PlacesApiError) as exc_info:
                client.search_nearby(0.0, 0.0)
        assert exc_info.value.status == "REQUEST_DENIED"
        assert cache.size() == 0

    def test_transport_errors_propagate(self, client):
        with patch("prolead.places.requests.get", side_effect=requests.ConnectionError("down")):
            with pytest.raises(requests.RequestException):
                client.search_nearby(0.0, 0.0)


class TestDetails:
    def test_returns_result(self, client, sample_place):
        payload = {"status": "OK", "result": sample_place}
        with patch("prolead.places.requests.get", return_value=_response(payload)) as mock_get:
            assert client.get_details("ChIJ-cafe-1") == sample_place
        assert mock_get.call_args[0][0] == DETAILS_URL
        assert mock_get.call_args[1]["params"]["place_id"] == "ChIJ-cafe-1"

    def test_not_found_is_cached(self, client):
        with patch("prolead.places.requests.get", return_value=_response({"status": "NOT_FOUND"})) as mock_get:
            assert client.get_details("ghost") is None
            assert client.get_details("ghost") is None
        mock_get.assert_called_once()

    def test_cached_miss_is_read_once(self, client, cache):
        with patch("prolead.places.requests.get", return_value=_response({"status": "NOT_FOUND"})), \
                patch.object(cache, "has", wraps=cache.has) as mock_has, \
                patch.object(cache, "get", wraps=cache.get) as mock_get:
            client.get_details("ghost")
            mock_get.reset_mock()
            assert client.get_details("ghost") is None
        mock_has.assert_not_called()
        mock_get.assert_called_once()

    def test_refetches_details_after_ttl(self, client, cache, clock, sample_place):
        cache.set("place_details:placeId:ChIJ-cafe-1", None, ttl=60)
        clock.advance(61)
        payload = {"status": "OK", "result": sample_place}
        with patch("prolead.places.requests.get", return_value=_response(payload)) as mock_get:
            assert client.get_details("ChIJ-cafe-1") == sample_place
        mock_get.assert_called_once()


class TestAutocomplete:
    def test_location_bias(self, client):
        payload = {"status": "OK", "predictions": [{"description": "Cafe Central"}]}
        with patch("prolead.places.requests.get", return_value=_response(payload)) as mock_get:
            predictions = client.autocomplete("cafe", lat=-23.5, lng=-46.6)

        assert predictions == [{"description": "Cafe Central"}]
        assert mock_get.call_args[0][0] == AUTOCOMPLETE_URL
        params = mock_get.call_args[1]["params"]
        assert params["location"] == "-23.5,-46.6"
        assert params["radius"] == 50000

    def test_failure_status_gives_empty_list(self, client):
        with patch("prolead.places.requests.get", return_value=_response({"status": "INVALID_REQUEST"})):
            assert client.autocomplete("x") == []


class TestCacheHousekeeping:
    def test_clear_cache_only_touches_places_keys(self, client, cache):
        cache.set("nearby_places:lat:1", [])
        cache.set("place_details:placeId:x", None)
        cache.set("autocomplete:input:a", [])
        cache.set("daily_word:day:2026-10-19", "crane")

        assert client.cache_key_counts() == {"nearby_places": 1, "place_details": 1, "autocomplete": 1}
        assert client.clear_cache() == 3
        assert cache.keys() == ["daily_word:day:2026-10-19"]
