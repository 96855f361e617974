import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from prolead.logger import log_debug

DEFAULT_TTL_SECONDS = 300  # 5 minutes

KEY_SEPARATOR = "|"

V = TypeVar("V")


@dataclass
class CacheEntry(Generic[V]):
    value: V
    stored_at: float
    ttl: float

    def is_valid(self, now: float) -> bool:
        return now - self.stored_at <= self.ttl


class TTLCache(Generic[V]):
    """In-memory key/value store with a per-entry time-to-live.

    Expired entries are never swept in the background: they are dropped
    when a read touches them or when stats() scans the whole table.
    """

    def __init__(self, default_ttl: float = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.time):
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry[V]] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: V, ttl: Optional[float] = None) -> None:
        """Store a value, replacing any previous entry for the key."""
        if ttl is None:
            ttl = self.default_ttl
        with self._lock:
            self._entries[key] = CacheEntry(value=value, stored_at=self._clock(), ttl=ttl)
            size = len(self._entries)
        log_debug("cache_set", key=key, ttl=ttl, size=size)

    def get(self, key: str, default: Any = None) -> Optional[V]:
        """Return the cached value if present and fresh, else default."""
        with self._lock:
            entry = self._fresh_entry(key)
        if entry is None:
            return default
        log_debug("cache_hit", key=key)
        return entry.value

    def has(self, key: str) -> bool:
        with self._lock:
            return self._fresh_entry(key) is not None

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        """Raw entry count, stale entries included."""
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def keys(self, prefix: str = "") -> List[str]:
        with self._lock:
            return [key for key in self._entries if key.startswith(prefix)]

    def clear_prefix(self, prefix: str) -> int:
        """Delete every key starting with prefix and return how many were removed."""
        with self._lock:
            doomed = [key for key in self._entries if key.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
        return len(doomed)

    def stats(self) -> Dict[str, int]:
        """Scan every entry, evict the expired ones and report the split."""
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if not entry.is_valid(now)]
            total = len(self._entries)
            for key in expired:
                del self._entries[key]
            current_size = len(self._entries)

        return {
            "total": total,
            "valid": total - len(expired),
            "expired": len(expired),
            "current_size": current_size,
        }

    def _fresh_entry(self, key: str) -> Optional[CacheEntry[V]]:
        # Caller holds the lock.
        entry = self._entries.get(key)
        if entry is None:
            log_debug("cache_miss", key=key)
            return None
        if not entry.is_valid(self._clock()):
            del self._entries[key]
            log_debug("cache_expired", key=key)
            return None
        return entry


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def make_key(prefix: str, params: Dict[str, Any]) -> str:
    """Build a canonical cache key from an operation name and its parameters.

    Parameter order does not matter; parameters set to None are left out.
    """
    parts = [
        f"{name}:{_format_value(params[name])}"
        for name in sorted(params)
        if params[name] is not None
    ]
    return f"{prefix}:{KEY_SEPARATOR.join(parts)}"


# One table per Lambda container, reused across warm invocations.
shared_cache: TTLCache[Any] = TTLCache()
