"""
Google Places web service client with response caching.
"""

import requests

from prolead.cache import TTLCache, make_key
from prolead.contact import has_usable_contact
from prolead.logger import log_info

NEARBY_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
DETAILS_URL = "https://maps.googleapis.com/maps/api/place/details/json"
AUTOCOMPLETE_URL = "https://maps.googleapis.com/maps/api/place/autocomplete/json"

PLACES_CACHE_TTL = 600  # 10 minutes
AUTOCOMPLETE_CACHE_TTL = 300  # 5 minutes
AUTOCOMPLETE_BIAS_RADIUS = 50000

NEARBY_PREFIX = "nearby_places"
DETAILS_PREFIX = "place_details"
AUTOCOMPLETE_PREFIX = "autocomplete"
CACHE_PREFIXES = (NEARBY_PREFIX, DETAILS_PREFIX, AUTOCOMPLETE_PREFIX)

_MISSING = object()

DETAIL_FIELDS = [
    "place_id",
    "name",
    "formatted_address",
    "geometry",
    "types",
    "rating",
    "user_ratings_total",
    "website",
    "formatted_phone_number",
    "international_phone_number",
    "business_status",
    "opening_hours",
    "price_level",
    "editorial_summary",
    "reviews",
]


class PlacesApiError(Exception):
    """The Places API answered with a status other than OK."""

    def __init__(self, operation: str, status: str, message: str = None):
        super().__init__(f"{operation} failed with status {status}" + (f": {message}" if message else ""))
        self.operation = operation
        self.status = status


class PlacesClient:
    def __init__(self, api_key: str, cache: TTLCache, timeout: int = 10):
        self.api_key = api_key
        self.cache = cache
        self.timeout = timeout

    def _call(self, url: str, params: dict) -> dict:
        resp = requests.get(url, params={**params, "key": self.api_key}, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def search_nearby(
        self,
        lat: float,
        lng: float,
        radius: int = 5000,
        place_type: str = None,
        require_contact: bool = False,
        max_results: int = 20,
    ) -> list:
        """Return places around a point, optionally only those with contact info."""
        cache_key = make_key(
            NEARBY_PREFIX,
            {"lat": lat, "lng": lng, "radius": radius, "type": place_type or "all"},
        )
        results = self.cache.get(cache_key)
        if results is None:
            params = {"location": f"{lat},{lng}", "radius": radius}
            if place_type:
                params["type"] = place_type
            payload = self._call(NEARBY_SEARCH_URL, params)
            status = payload.get("status")
            if status == "ZERO_RESULTS":
                results = []
            elif status == "OK":
                results = payload.get("results", [])
            else:
                raise PlacesApiError("nearby_search", status, payload.get("error_message"))
            self.cache.set(cache_key, results, ttl=PLACES_CACHE_TTL)

        unique = []
        seen = set()
        for place in results:
            place_id = place.get("place_id")
            if place_id in seen:
                continue
            seen.add(place_id)
            if require_contact and not has_usable_contact(place):
                continue
            unique.append(place)

        log_info(
            "places_nearby_filtered",
            fetched=len(results),
            kept=len(unique),
            require_contact=require_contact,
        )
        return unique[:max_results]

    def get_details(self, place_id: str):
        """Return the place's details, or None if the provider does not know it."""
        cache_key = make_key(DETAILS_PREFIX, {"placeId": place_id})
        cached = self.cache.get(cache_key, _MISSING)
        if cached is not _MISSING:
            return cached

        payload = self._call(DETAILS_URL, {"place_id": place_id, "fields": ",".join(DETAIL_FIELDS)})
        status = payload.get("status")
        if status == "OK":
            place = payload.get("result")
        elif status in ("NOT_FOUND", "INVALID_REQUEST"):
            place = None
        else:
            raise PlacesApiError("place_details", status, payload.get("error_message"))

        # Misses are cached too so unknown ids are not looked up again.
        self.cache.set(cache_key, place, ttl=PLACES_CACHE_TTL)
        return place

    def autocomplete(self, text: str, lat: float = None, lng: float = None) -> list:
        cache_key = make_key(AUTOCOMPLETE_PREFIX, {"input": text, "lat": lat, "lng": lng})
        predictions = self.cache.get(cache_key)
        if predictions is not None:
            return predictions

        params = {"input": text}
        if lat is not None and lng is not None:
            params["location"] = f"{lat},{lng}"
            params["radius"] = AUTOCOMPLETE_BIAS_RADIUS
        payload = self._call(AUTOCOMPLETE_URL, params)
        predictions = payload.get("predictions", []) if payload.get("status") == "OK" else []

        self.cache.set(cache_key, predictions, ttl=AUTOCOMPLETE_CACHE_TTL)
        return predictions

    def clear_cache(self) -> int:
        return sum(self.cache.clear_prefix(f"{prefix}:") for prefix in CACHE_PREFIXES)

    def cache_key_counts(self) -> dict:
        return {prefix: len(self.cache.keys(f"{prefix}:")) for prefix in CACHE_PREFIXES}
