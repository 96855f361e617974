"""
Lambda: GET /leads/export
Downloads every saved lead as a JSON document.
"""

import sys
import os
from datetime import datetime, timezone

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from prolead.leads import export_leads, list_leads
from prolead.logger import log_info, log_error
from prolead.responses import attachment, error


def handler(event, context):
    try:
        rows = list_leads()
    except Exception:
        log_error("leads_export_failed", error_code="DB_ERROR")
        return error("DB_ERROR", "Failed to export leads", status_code=500)

    filename = f"leads-{datetime.now(timezone.utc).date().isoformat()}.json"
    log_info("leads_exported", count=len(rows))

    return attachment(export_leads(rows), filename)
