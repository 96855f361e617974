"""
Lambda: GET /leads?status=&business_type=&min_rating=&tags=&has_phone=...
Lists saved leads matching the filters, best-scored first.
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from pydantic import ValidationError
from prolead.leads import filter_leads, lead_score, list_leads, sort_leads
from prolead.logger import log_info, log_error, Timer
from prolead.responses import success, error
from prolead.validators import LeadFilter


def handler(event, context):
    query_params = event.get("queryStringParameters") or {}

    try:
        filters = LeadFilter(**query_params)
    except ValidationError as e:
        return error("VALIDATION_ERROR", str(e))

    with Timer() as t:
        try:
            rows = list_leads()
        except Exception:
            log_error("leads_fetch_failed", error_code="DB_ERROR")
            return error("DB_ERROR", "Failed to fetch leads", status_code=500)

    leads = sort_leads(filter_leads(rows, filters))
    for lead in leads:
        lead["score"] = lead_score(lead)

    log_info(
        "leads_fetched",
        total=len(rows),
        count=len(leads),
        execution_time_ms=t.duration_ms,
    )

    return success({"leads": leads, "total": len(rows)})
