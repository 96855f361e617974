import json
import logging
import os
import time

logger = logging.getLogger("prolead")
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())

if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)


def _emit(level: int, entry: dict):
    if logger.isEnabledFor(level):
        logger.log(level, json.dumps(entry, default=str))


def log_debug(event: str, **kwargs):
    _emit(logging.DEBUG, {"level": "DEBUG", "event": event, **kwargs})


def log_info(event: str, **kwargs):
    """Emit a structured JSON log entry. Never include lead contact details."""
    _emit(logging.INFO, {"level": "INFO", "event": event, **kwargs})


def log_error(event: str, error_code: str = None, **kwargs):
    """Emit a structured JSON error log entry."""
    _emit(logging.ERROR, {"level": "ERROR", "event": event, "error_code": error_code, **kwargs})


class Timer:
    """Context manager for measuring execution time in milliseconds."""

    def __enter__(self):
        self.start = time.time()
        return self

    def __exit__(self, *args):
        self.duration_ms = round((time.time() - self.start) * 1000, 2)
