"""
Lambda: POST /access
Grants access when the body's word matches today's daily word.
"""

import json
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from pydantic import ValidationError
from prolead.cache import shared_cache
from prolead.daily_word import verify_word
from prolead.logger import log_info, log_error
from prolead.responses import success, error
from prolead.validators import AccessRequest


def handler(event, context):
    try:
        body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError:
        return error("VALIDATION_ERROR", "Invalid JSON body")

    if not isinstance(body, dict):
        return error("VALIDATION_ERROR", "Body must be a JSON object")

    try:
        req = AccessRequest(**body)
    except ValidationError as e:
        return error("VALIDATION_ERROR", str(e))

    if not verify_word(shared_cache, req.word):
        log_error("access_denied", error_code="ACCESS_DENIED")
        return error("ACCESS_DENIED", "Incorrect word", status_code=401)

    log_info("access_granted")

    return success({"granted": True})
