"""
Lambda: DELETE /leads/{lead_id}
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from prolead.leads import delete_lead
from prolead.logger import log_info, log_error
from prolead.responses import success, error


def handler(event, context):
    path_params = event.get("pathParameters") or {}
    lead_id = path_params.get("lead_id")

    if not lead_id:
        return error("VALIDATION_ERROR", "lead_id is required")

    try:
        deleted = delete_lead(lead_id)
    except Exception:
        log_error("lead_delete_failed", lead_id=lead_id, error_code="DB_ERROR")
        return error("DB_ERROR", "Failed to delete lead", status_code=500)

    if not deleted:
        return error("NOT_FOUND", "Lead not found", status_code=404)

    log_info("lead_deleted", lead_id=lead_id)

    return success({"lead_id": lead_id, "deleted": True})
