"""In-memory keyword cache keyed by job URL (or a cheap text fingerprint).

Entries expire a fixed TTL after creation and the table is bounded.
Eviction is strict insertion order (FIFO): the oldest-inserted entry goes
first even if it was read a moment ago.
"""

import logging
import threading
import time
from typing import Callable

from models.schemas.keyword_set import CacheEntry, KeywordSet

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 30 * 60
DEFAULT_MAX_ENTRIES = 100
FINGERPRINT_PREFIX_CHARS = 200


def make_cache_key(job_url: str | None, text: str | None) -> str:
    """Derive a cache key: the job URL verbatim, else prefix + length.

    The fallback is a fingerprint, not a hash. Two postings that share their
    first 200 characters and total length collide.
    """
    if job_url:
        return job_url
    text = text or ""
    return f"{text[:FINGERPRINT_PREFIX_CHARS]}_{len(text)}"


class KeywordCache:
    """Thread-safe, TTL-bounded, FIFO-evicting keyword store."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> KeywordSet | None:
        """Return the cached keywords if present and younger than the TTL.

        Expired entries are reported as absent but left in place; they are
        only removed by FIFO eviction or ``clear()``.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.created_at >= self.ttl_seconds:
                return None
        logger.debug("Keyword cache hit: %s", key[:50])
        return entry.keywords

    def put(self, key: str, keywords: KeywordSet) -> None:
        with self._lock:
            if key not in self._entries and len(self._entries) >= self.max_entries:
                oldest = next(iter(self._entries))
                del self._entries[oldest]
                logger.debug("Keyword cache evicted: %s", oldest[:50])
            # Re-putting a key refreshes its timestamp but keeps its FIFO slot
            self._entries[key] = CacheEntry(keywords=keywords, created_at=self._clock())

    def get_for(self, job_url: str | None, text: str | None) -> KeywordSet | None:
        return self.get(make_cache_key(job_url, text))

    def put_for(self, job_url: str | None, text: str | None, keywords: KeywordSet) -> None:
        self.put(make_cache_key(job_url, text), keywords)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
