"""
Lambda: GET /places/autocomplete?input=&lat=&lng=
Returns address/business predictions for a partial search string.
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

import requests
from pydantic import ValidationError
from prolead.cache import shared_cache
from prolead.logger import log_info, log_error
from prolead.places import PlacesClient
from prolead.responses import success, error
from prolead.secrets import get_places_api_key
from prolead.validators import AutocompleteRequest


def handler(event, context):
    query_params = event.get("queryStringParameters") or {}

    try:
        req = AutocompleteRequest(**query_params)
    except ValidationError as e:
        return error("VALIDATION_ERROR", str(e))

    try:
        api_key = get_places_api_key()
    except Exception:
        log_error("autocomplete_failed", error_code="SECRETS_ERROR")
        return error("SECRETS_ERROR", "Failed to retrieve API credentials", status_code=500)

    try:
        predictions = PlacesClient(api_key, cache=shared_cache).autocomplete(
            req.input, lat=req.lat, lng=req.lng
        )
    except requests.RequestException:
        log_error("autocomplete_failed", error_code="EXTERNAL_API_ERROR")
        return error("EXTERNAL_API_ERROR", "Failed to fetch predictions", status_code=502)

    log_info("autocomplete_fetched", count=len(predictions))

    return success({"predictions": predictions})
