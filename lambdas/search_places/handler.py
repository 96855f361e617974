"""
Lambda: GET /places/nearby?lat=&lng=&radius=&type=&require_contact=&max_results=
Searches the Places API for businesses around a point.
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

import requests
from pydantic import ValidationError
from prolead.cache import shared_cache
from prolead.contact import contact_stats
from prolead.logger import log_info, log_error, Timer
from prolead.places import PlacesApiError, PlacesClient
from prolead.responses import success, error
from prolead.secrets import get_places_api_key
from prolead.validators import NearbySearchRequest


def handler(event, context):
    query_params = event.get("queryStringParameters") or {}

    try:
        search = NearbySearchRequest(**query_params)
    except ValidationError as e:
        log_error("places_search_failed", error_code="VALIDATION_ERROR")
        return error("VALIDATION_ERROR", str(e))

    try:
        api_key = get_places_api_key()
    except Exception:
        log_error("places_search_failed", error_code="SECRETS_ERROR")
        return error("SECRETS_ERROR", "Failed to retrieve API credentials", status_code=500)

    client = PlacesClient(api_key, cache=shared_cache)

    with Timer() as t:
        try:
            places = client.search_nearby(
                search.lat,
                search.lng,
                radius=search.radius,
                place_type=search.type,
                require_contact=search.require_contact,
                max_results=search.max_results,
            )
        except (requests.RequestException, PlacesApiError):
            log_error("places_search_failed", error_code="EXTERNAL_API_ERROR")
            return error("EXTERNAL_API_ERROR", "Failed to search places", status_code=502)

    stats = contact_stats(places)
    log_info(
        "places_searched",
        count=len(places),
        require_contact=search.require_contact,
        filter_efficiency=stats["filter_efficiency"],
        execution_time_ms=t.duration_ms,
    )

    return success({"places": places, "stats": stats})
