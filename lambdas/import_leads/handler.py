"""
Lambda: POST /leads/import
Replaces all saved leads with the contents of an exported leads document.
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from prolead.leads import parse_import, replace_all_leads
from prolead.logger import log_info, log_error, Timer
from prolead.responses import success, error


def handler(event, context):
    try:
        leads = parse_import(event.get("body") or "")
    except ValueError as e:
        log_error("leads_import_failed", error_code="VALIDATION_ERROR")
        return error("VALIDATION_ERROR", str(e))

    with Timer() as t:
        try:
            count = replace_all_leads(leads)
        except Exception:
            log_error("leads_import_failed", error_code="DB_ERROR")
            return error("DB_ERROR", "Failed to import leads", status_code=500)

    log_info("leads_imported", count=count, execution_time_ms=t.duration_ms)

    return success({"imported": count})
