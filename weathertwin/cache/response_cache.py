"""In-memory response cache with per-entry expiry."""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from weathertwin.models.common import format_coordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    inserted_at: float
    expires_at: float

    def is_fresh(self, now: float) -> bool:
        return now < self.expires_at

    def age_seconds(self, now: float) -> float:
        return now - self.inserted_at


class ResponseCache:
    """Keyed store of upstream responses.

    Entries are replaced or deleted, never mutated. An entry is reachable
    while ``now < expires_at``; expired entries are dropped on read or by
    ``purge_expired``.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug("Cache miss: %s", key)
                return None
            if not entry.is_fresh(now):
                del self._entries[key]
                logger.debug(
                    "Cache expired: %s (age %.1fs)", key, entry.age_seconds(now)
                )
                return None
            logger.debug("Cache hit: %s", key)
            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: float) -> CacheEntry:
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        now = self._clock()
        entry = CacheEntry(value=value, inserted_at=now, expires_at=now + ttl_seconds)
        with self._lock:
            self._entries[key] = entry
        return entry

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def purge_expired(self) -> int:
        """Drop every expired entry. Returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [k for k, e in self._entries.items() if not e.is_fresh(now)]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug("Purged %d expired cache entries", len(expired))
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


def realtime_key(latitude: float | str, longitude: float | str) -> str:
    return f"realtime:{format_coordinate(latitude)},{format_coordinate(longitude)}"


def historical_key(
    latitude: float | str, longitude: float | str, start_date: str, end_date: str
) -> str:
    return (
        f"historical:{format_coordinate(latitude)},{format_coordinate(longitude)},"
        f"{start_date},{end_date}"
    )
