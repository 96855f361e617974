"""
Daily word used as the access password.

The word comes from public word APIs, tried in order. When none of them
answers with a five-letter word, a fallback is picked deterministically
from the date so every container agrees on the same word.
"""

from datetime import date, datetime, timezone

import requests

from prolead.cache import TTLCache, make_key
from prolead.logger import log_error, log_info

DAILY_WORD_TTL = 24 * 60 * 60
CACHE_KEY_PREFIX = "daily_word"
WORD_LENGTH = 5

WORD_API_URLS = [
    "https://wordle-api.vercel.app/api/wordle/{day}",
    "https://api.datamuse.com/words?sp=?????&max=1",
    "https://random-word-api.herokuapp.com/word?length=5",
]

FALLBACK_WORDS = [
    "prolead", "system", "access", "login", "secure", "portal", "manage", "control",
    "dashboard", "monitor", "track", "analyze", "report", "export", "import", "sync",
    "backup", "restore", "config", "setup", "install", "update", "patch", "fix",
    "debug", "test", "build", "deploy", "release", "version", "branch", "merge",
]


def _extract_word(data):
    if isinstance(data, str):
        return data
    if isinstance(data, dict):
        for field in ("solution", "word", "answer"):
            if isinstance(data.get(field), str):
                return data[field]
    if isinstance(data, list) and data:
        first = data[0]
        if isinstance(first, dict):
            first = first.get("word")
        if isinstance(first, str):
            return first
    return None


def fallback_word(day: date) -> str:
    midnight = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
    epoch_ms = int(midnight.timestamp() * 1000)
    return FALLBACK_WORDS[epoch_ms % len(FALLBACK_WORDS)]


def fetch_word(day: date) -> str:
    """Ask each word API in turn; fall back to the date-seeded word."""
    for url in WORD_API_URLS:
        url = url.format(day=day.isoformat())
        try:
            resp = requests.get(url, headers={"Accept": "application/json"}, timeout=5)
            resp.raise_for_status()
            word = _extract_word(resp.json())
        except (requests.RequestException, ValueError):
            log_error("daily_word_source_failed", error_code="EXTERNAL_API_ERROR", source=url)
            continue

        if word and len(word) == WORD_LENGTH:
            log_info("daily_word_fetched", source=url, day=day.isoformat())
            return word.lower()

    log_info("daily_word_fallback", day=day.isoformat())
    return fallback_word(day)


def get_daily_word(cache: TTLCache, day: date = None) -> str:
    day = day or datetime.now(timezone.utc).date()
    cache_key = make_key(CACHE_KEY_PREFIX, {"day": day.isoformat()})

    word = cache.get(cache_key)
    if word is None:
        word = fetch_word(day)
        cache.set(cache_key, word, ttl=DAILY_WORD_TTL)
    return word


def verify_word(cache: TTLCache, guess: str, day: date = None) -> bool:
    return guess.strip().lower() == get_daily_word(cache, day)
