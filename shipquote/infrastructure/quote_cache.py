"""Quote Cache — bounded, TTL-based in-process store of sorted offer lists.

Invariants:
    - An entry is readable only while now - computed_at < ttl_ms
    - Expired entries are never re-validated: get() reports a miss and leaves them
      in place, the next put() for the key overwrites them
    - put() replaces, never merges
    - Once the entry count exceeds max_entries, one sweep drops every expired entry
    - Every read or write of _entries happens under _lock

Design Decisions:
    - Explicitly constructed and injected (not module-level): tests build isolated
      caches, the app owns one per process via lifespan
    - Single coarse threading.Lock: sync route handlers run in the threadpool and
      the critical sections are a dict lookup or a short scan
    - O(n) sweep over LRU/heap: key space is narrow (weights x 56 states x 1000 prefixes)
    - Injectable millisecond clock: TTL tests advance time without sleeping
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable

from shipquote.core.domain_types import CacheKey, CarrierOffer, EpochMillis

logger = logging.getLogger(__name__)


DEFAULT_TTL_MS: int = 5 * 60 * 1000
DEFAULT_MAX_ENTRIES: int = 1000


def monotonic_millis() -> EpochMillis:
    return EpochMillis(time.monotonic_ns() // 1_000_000)


@dataclass(frozen=True)
class CacheEntry:
    offers: tuple[CarrierOffer, ...]
    computed_at: EpochMillis


@dataclass(frozen=True)
class CacheStats:
    size: int
    max_entries: int
    ttl_ms: int
    hits: int
    misses: int
    evictions: int

    def to_dict(self) -> dict:
        return {
            "size": self.size,
            "maxEntries": self.max_entries,
            "ttlMs": self.ttl_ms,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
        }


class QuoteCache:
    """TTL cache from derived quote keys to sorted offer tuples."""

    def __init__(
        self,
        ttl_ms: int = DEFAULT_TTL_MS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], int] = monotonic_millis,
    ):
        if ttl_ms <= 0:
            raise ValueError(f"ttl_ms must be positive, got {ttl_ms}")
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self.ttl_ms = ttl_ms
        self.max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[CacheKey, CacheEntry] = {}
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._closed = False

    def get(self, key: CacheKey) -> tuple[CarrierOffer, ...] | None:
        """Return fresh offers for key, or None on miss or expiry."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or not self._is_fresh(entry, now):
                self._misses += 1
                return None
            self._hits += 1
            return entry.offers

    def put(self, key: CacheKey, offers: list[CarrierOffer] | tuple[CarrierOffer, ...]) -> None:
        """Store offers for key, replacing any prior entry."""
        entry = CacheEntry(offers=tuple(offers), computed_at=EpochMillis(self._clock()))
        with self._lock:
            self._entries[key] = entry

    def evict_if_oversized(self) -> int:
        """Sweep expired entries only when past the high-water mark."""
        with self._lock:
            if len(self._entries) <= self.max_entries:
                return 0
            removed = self._sweep_locked(self._clock())
        logger.info(
            f"Quote cache sweep removed {removed} expired entries",
            extra={"evicted": removed},
        )
        return removed

    def evict_expired(self) -> int:
        """Sweep expired entries now, regardless of size."""
        with self._lock:
            return self._sweep_locked(self._clock())

    def clear(self) -> int:
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
            return removed

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                size=len(self._entries),
                max_entries=self.max_entries,
                ttl_ms=self.ttl_ms,
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
            )

    def close(self) -> None:
        """Lifecycle hook. Nothing to release; entries die with the process."""
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _is_fresh(self, entry: CacheEntry, now: int) -> bool:
        return now - entry.computed_at < self.ttl_ms

    def _sweep_locked(self, now: int) -> int:
        expired = [
            key for key, entry in self._entries.items()
            if not self._is_fresh(entry, now)
        ]
        for key in expired:
            del self._entries[key]
        self._evictions += len(expired)
        return len(expired)
