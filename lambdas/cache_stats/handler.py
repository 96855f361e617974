"""
Lambda: GET /cache/stats and DELETE /cache?prefix=
Reports or clears this container's response cache.
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from prolead.cache import shared_cache
from prolead.daily_word import CACHE_KEY_PREFIX as DAILY_WORD_PREFIX
from prolead.logger import log_info
from prolead.places import CACHE_PREFIXES as PLACES_PREFIXES
from prolead.responses import success, error

KEY_FAMILIES = (*PLACES_PREFIXES, DAILY_WORD_PREFIX)


def _stats():
    stats = shared_cache.stats()
    stats["families"] = {
        family: len(shared_cache.keys(f"{family}:")) for family in KEY_FAMILIES
    }
    return stats


def _clear(prefix):
    if prefix:
        removed = shared_cache.clear_prefix(prefix)
    else:
        removed = shared_cache.size()
        shared_cache.clear()
    log_info("cache_cleared", prefix=prefix, removed=removed)
    return {"removed": removed}


def handler(event, context):
    method = event.get("httpMethod", "GET")

    if method == "GET":
        return success(_stats())
    if method == "DELETE":
        query_params = event.get("queryStringParameters") or {}
        return success(_clear(query_params.get("prefix")))

    return error("METHOD_NOT_ALLOWED", f"Unsupported method {method}", status_code=405)
