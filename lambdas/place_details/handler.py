"""
Lambda: GET /places/{place_id}
Returns the Places API details for one place.
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

import requests
from prolead.cache import shared_cache
from prolead.logger import log_info, log_error, Timer
from prolead.places import PlacesApiError, PlacesClient
from prolead.responses import success, error
from prolead.secrets import get_places_api_key


def handler(event, context):
    path_params = event.get("pathParameters") or {}
    place_id = path_params.get("place_id")

    if not place_id:
        return error("VALIDATION_ERROR", "place_id is required")

    try:
        api_key = get_places_api_key()
    except Exception:
        log_error("place_details_failed", place_id=place_id, error_code="SECRETS_ERROR")
        return error("SECRETS_ERROR", "Failed to retrieve API credentials", status_code=500)

    with Timer() as t:
        try:
            place = PlacesClient(api_key, cache=shared_cache).get_details(place_id)
        except (requests.RequestException, PlacesApiError):
            log_error("place_details_failed", place_id=place_id, error_code="EXTERNAL_API_ERROR")
            return error("EXTERNAL_API_ERROR", "Failed to fetch place details", status_code=502)

    if place is None:
        return error("NOT_FOUND", "Place not found", status_code=404)

    log_info("place_details_fetched", place_id=place_id, execution_time_ms=t.duration_ms)

    return success({"place": place})
