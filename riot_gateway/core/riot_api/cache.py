"""
Caching layer for Riot API responses using per-entry TTLs in memory.
"""

import copy
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

import structlog

logger = structlog.get_logger(__name__)


class ResourceKind(str, Enum):
    """Kinds of remote resources; each has its own cache key namespace."""

    IDENTITY = "identity"
    PROFILE = "profile"
    RANKED_ENTRIES = "ranked_entries"
    MASTERY_LIST = "mastery_list"
    MASTERY_SINGLE = "mastery_single"
    MATCH_IDS = "match_ids"
    MATCH_DETAIL = "match_detail"


def cache_key(kind: Union[ResourceKind, str], *parts: Any) -> str:
    """
    Build a cache key prefixed with the resource kind.

    Example: cache_key(ResourceKind.PROFILE, "na1", "abc") -> "profile:na1:abc"
    """
    prefix = kind.value if isinstance(kind, ResourceKind) else str(kind)
    return ":".join([prefix, *("" if part is None else str(part) for part in parts)])


@dataclass(frozen=True)
class CacheEntry:
    """A cached value with its own absolute expiry."""

    value: Any
    stored_at: float
    ttl: float

    @property
    def expires_at(self) -> float:
        return self.stored_at + self.ttl

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class ResponseCache:
    """In-memory TTL cache with thread-safe operations."""

    def __init__(
        self, enabled: bool = True, clock: Callable[[], float] = time.monotonic
    ):
        """
        Initialize response cache.

        Args:
            enabled: When False every lookup misses and nothing is stored
            clock: Monotonic time source in seconds
        """
        self.enabled = enabled
        self.clock = clock
        self.entries: Dict[str, CacheEntry] = {}
        self.lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache if not expired.

        Args:
            key: Cache key

        Returns:
            Cached value if exists and not expired, None otherwise
        """
        if not self.enabled:
            return None
        with self.lock:
            entry = self.entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            if entry.is_expired(self.clock()):
                # Remove expired entry
                del self.entries[key]
                self._misses += 1
                logger.debug("Cache expired", key=key)
                return None
            self._hits += 1
            logger.debug("Cache hit", key=key, hits=self._hits)
            # Callers get their own copy; stored values are never mutated
            return copy.deepcopy(entry.value)

    def set(self, key: str, value: Any, ttl: Optional[float]) -> bool:
        """
        Store value under key for ttl seconds.

        A missing or non-positive ttl means "do not cache". A copy of the value
        is stored, and entries that have already expired are dropped.

        Returns:
            True if the value was stored
        """
        if not self.enabled or ttl is None or ttl <= 0:
            return False
        with self.lock:
            now = self.clock()
            self._purge_expired(now)
            self.entries[key] = CacheEntry(
                value=copy.deepcopy(value), stored_at=now, ttl=ttl
            )
        logger.debug("Cache set", key=key, ttl=ttl)
        return True

    def purge_expired(self) -> int:
        """Remove every expired entry and return how many were removed."""
        with self.lock:
            return self._purge_expired(self.clock())

    def _purge_expired(self, now: float) -> int:
        expired = [key for key, entry in self.entries.items() if entry.is_expired(now)]
        for key in expired:
            del self.entries[key]
        if expired:
            logger.debug("Cache purged expired entries", count=len(expired))
        return len(expired)

    def delete(self, key: str) -> bool:
        """Remove a single entry."""
        with self.lock:
            return self.entries.pop(key, None) is not None

    def clear(self) -> None:
        """Clear all entries from cache."""
        with self.lock:
            count = len(self.entries)
            self.entries.clear()
            self._hits = 0
            self._misses = 0
        logger.info("Riot API cache cleared", entries_removed=count)

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics without evicting anything."""
        with self.lock:
            keys: List[str] = list(self.entries)
            return {
                "size": len(keys),
                "keys": keys,
                "hits": self._hits,
                "misses": self._misses,
            }

    def __contains__(self, key: object) -> bool:
        with self.lock:
            return key in self.entries

    def __len__(self) -> int:
        """Get number of entries in cache."""
        return len(self.entries)
