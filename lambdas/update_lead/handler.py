"""
Lambda: PATCH /leads/{lead_id}
Updates status, notes, tags or contact details of a lead.
"""

import json
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from pydantic import ValidationError
from prolead.leads import update_lead
from prolead.logger import log_info, log_error, Timer
from prolead.responses import success, error
from prolead.validators import LeadUpdateRequest


def handler(event, context):
    path_params = event.get("pathParameters") or {}
    lead_id = path_params.get("lead_id")

    if not lead_id:
        return error("VALIDATION_ERROR", "lead_id is required")

    try:
        body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError:
        return error("VALIDATION_ERROR", "Invalid JSON body")

    if not isinstance(body, dict):
        return error("VALIDATION_ERROR", "Body must be a JSON object")

    try:
        updates = LeadUpdateRequest(**body).model_dump(exclude_unset=True)
    except ValidationError as e:
        log_error("lead_update_failed", lead_id=lead_id, error_code="VALIDATION_ERROR")
        return error("VALIDATION_ERROR", str(e))

    with Timer() as t:
        try:
            row = update_lead(lead_id, updates)
        except Exception:
            log_error("lead_update_failed", lead_id=lead_id, error_code="DB_ERROR")
            return error("DB_ERROR", "Failed to update lead", status_code=500)

    if row is None:
        return error("NOT_FOUND", "Lead not found", status_code=404)

    log_info(
        "lead_updated",
        lead_id=lead_id,
        fields=sorted(updates),
        execution_time_ms=t.duration_ms,
    )

    return success({"lead": row})
