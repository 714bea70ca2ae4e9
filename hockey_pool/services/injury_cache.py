"""
In-memory cache slot for the last injury scrape.
"""

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

from shared.models import ScrapeResult

logger = logging.getLogger(__name__)


class CacheState(str, Enum):
    EMPTY = "EMPTY"
    FRESH = "FRESH"
    STALE = "STALE"


@dataclass(frozen=True)
class CacheEntry:
    """Immutable snapshot held by the cache; replaced wholesale, never edited."""

    result: ScrapeResult
    fetched_at: float
    version: int


class InjuryCache:
    """
    Single-slot cache for scraped injuries.

    Readers get the current CacheEntry; writers swap in a new one. Only the
    swap is locked, so concurrent scrapes can race and the last writer wins.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._entry: Optional[CacheEntry] = None
        self._last_error: Optional[str] = None

    def read(self) -> Optional[CacheEntry]:
        return self._entry

    def replace(self, result: ScrapeResult) -> CacheEntry:
        """Store a new scrape result and clear any recorded failure."""
        with self._lock:
            version = self._entry.version + 1 if self._entry else 1
            entry = CacheEntry(result=result, fetched_at=self._clock(), version=version)
            self._entry = entry
            self._last_error = None
        logger.info(f"Injury cache updated: {result.count} injuries (version {version})")
        return entry

    def mark_failed(self, error: str) -> None:
        """Record a refresh failure; the existing entry is kept as stale data."""
        with self._lock:
            self._last_error = error

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    def age(self, entry: Optional[CacheEntry] = None) -> Optional[float]:
        entry = entry or self._entry
        if entry is None:
            return None
        return self._clock() - entry.fetched_at

    def is_fresh(self, entry: Optional[CacheEntry] = None) -> bool:
        age = self.age(entry)
        return age is not None and age < self.ttl_seconds

    def state(self) -> CacheState:
        entry = self._entry
        if entry is None:
            return CacheState.EMPTY
        if self._last_error is None and self.is_fresh(entry):
            return CacheState.FRESH
        return CacheState.STALE

    def get_cache_stats(self) -> Dict[str, Any]:
        """Summary of the cache slot for health checks."""
        entry = self._entry
        age = self.age(entry)
        return {
            "state": self.state().value,
            "version": entry.version if entry else 0,
            "count": entry.result.count if entry else 0,
            "scraped_at": entry.result.scraped_at if entry else None,
            "age_seconds": round(age, 1) if age is not None else None,
            "ttl_remaining": max(0, int(self.ttl_seconds - age)) if age is not None else None,
            "last_error": self._last_error,
        }
