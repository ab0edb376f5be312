"""In-memory, per-user/per-month cache of generated messages."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .domain import ActivityStats, MotivationalMessage
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="motivation_cache")

CacheKey = Tuple[str, int, str]

DEFAULT_TTL_SECONDS = 15 * 60


def cache_key(user_id: str, year: int, month: int) -> CacheKey:
    """One slot per user per calendar month: (user, year, zero-padded month)."""
    return user_id, year, f"{month:02d}"


@dataclass
class CacheEntry:
    """Stored message plus the stats it was generated from."""
    stats: ActivityStats
    message: MotivationalMessage
    created_at: float


def stats_match(cached: ActivityStats, current: ActivityStats) -> bool:
    """Cheap change detector: compares activity count and distance only."""
    return (
        cached.total_activities == current.total_activities
        and cached.total_distance_meters == current.total_distance_meters
    )


class MotivationCache:
    """Thread-safe, TTL-aware store. Stale entries are dropped lazily on lookup."""

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS, clock: Optional[Callable[[], float]] = None) -> None:
        """Initialize with a TTL (seconds) and an optional monotonic clock."""
        self.ttl = ttl_seconds
        self._clock = clock or time.monotonic
        self._entries: dict[CacheKey, CacheEntry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def lookup(self, user_id: str, stats: ActivityStats) -> Optional[MotivationalMessage]:
        """Return the cached message marked `cached=True`, or None on a miss."""
        key = cache_key(user_id, stats.year, stats.month)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.created_at > self.ttl:
                logger.debug("Cache entry expired for %s", key)
                del self._entries[key]
                return None
            if not stats_match(entry.stats, stats):
                logger.debug("Cache entry invalidated by changed stats for %s", key)
                del self._entries[key]
                return None
            return entry.message.model_copy(update={"cached": True})

    def store(self, user_id: str, stats: ActivityStats, message: MotivationalMessage) -> None:
        """Overwrite the slot for this user/month with a fresh entry."""
        key = cache_key(user_id, stats.year, stats.month)
        entry = CacheEntry(
            stats=stats.model_copy(),
            message=message.model_copy(update={"cached": False}),
            created_at=self._clock(),
        )
        with self._lock:
            self._entries[key] = entry

    def clear(self, user_id: str) -> None:
        """Remove every entry belonging to `user_id`, all months."""
        with self._lock:
            for key in [k for k in self._entries if k[0] == user_id]:
                del self._entries[key]

    def clear_all(self) -> None:
        """Clear all entries."""
        with self._lock:
            self._entries.clear()
