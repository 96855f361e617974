"""
Lambda: POST /leads
Saves a lead. The body is either a full lead or {"place_id": ...}, in which
case the lead is captured from the place's details.
"""

import json
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

import requests
from pydantic import ValidationError
from prolead.cache import shared_cache
from prolead.leads import create_lead, get_lead_by_place_id, lead_from_place
from prolead.logger import log_info, log_error, Timer
from prolead.places import PlacesApiError, PlacesClient
from prolead.responses import success, error
from prolead.secrets import get_places_api_key
from prolead.validators import CaptureFromPlaceRequest, LeadCreateRequest


def _lead_from_place_id(api_key, place_id):
    place = PlacesClient(api_key, cache=shared_cache).get_details(place_id)
    if place is None:
        return None
    return lead_from_place(place)


def _fetch_api_key():
    try:
        return get_places_api_key()
    except Exception:
        log_error("lead_creation_failed", error_code="SECRETS_ERROR")
        return None


def handler(event, context):
    try:
        body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError:
        return error("VALIDATION_ERROR", "Invalid JSON body")

    if not isinstance(body, dict):
        return error("VALIDATION_ERROR", "Body must be a JSON object")

    # Validate input
    try:
        if set(body) == {"place_id"}:
            capture = CaptureFromPlaceRequest(**body)
            api_key = _fetch_api_key()
            if api_key is None:
                return error("SECRETS_ERROR", "Failed to retrieve API credentials", status_code=500)
            lead = _lead_from_place_id(api_key, capture.place_id)
            if lead is None:
                return error("NOT_FOUND", "Place not found", status_code=404)
        else:
            lead = LeadCreateRequest(**body)
    except ValidationError as e:
        log_error("lead_creation_failed", error_code="VALIDATION_ERROR")
        return error("VALIDATION_ERROR", str(e))
    except (requests.RequestException, PlacesApiError):
        log_error("lead_creation_failed", error_code="EXTERNAL_API_ERROR")
        return error("EXTERNAL_API_ERROR", "Failed to fetch place details", status_code=502)
    except (KeyError, TypeError):
        # Place record without the fields a lead needs (name, address, geometry).
        log_error("lead_creation_failed", error_code="EXTERNAL_API_ERROR")
        return error("EXTERNAL_API_ERROR", "Place details are incomplete", status_code=502)

    with Timer() as t:
        try:
            if lead.place_id and get_lead_by_place_id(lead.place_id):
                log_error("lead_creation_failed", error_code="DUPLICATE_LEAD")
                return error(
                    "DUPLICATE_LEAD",
                    "A lead for this place already exists",
                    status_code=409,
                )
            row = create_lead(lead)
        except Exception:
            log_error("lead_creation_failed", error_code="DB_ERROR")
            return error("DB_ERROR", "Failed to save lead", status_code=500)

    log_info(
        "lead_created",
        lead_id=str(row["id"]),
        from_place=lead.place_id is not None,
        execution_time_ms=t.duration_ms,
    )

    return success({"lead": row}, status_code=201)
