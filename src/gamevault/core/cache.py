# ===== IMPORTS & DEPENDENCIES =====
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from gamevault.config import TRENDING_CACHE_TTL

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    key: str
    payload: Any
    expires_at: float


# ===== CORE BUSINESS LOGIC =====
class ResponseCache:
    """
    Short-lived in-memory cache for normalized responses.

    Entries are replaced on every store and never mutated. Expired entries are
    dropped when they are read, and swept on every store so keys that are never
    read again do not accumulate. There is no background task.
    """

    def __init__(self, ttl: float = TRENDING_CACHE_TTL, clock: Callable[[], float] = time.monotonic):
        self._ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            return None
        if entry.expires_at <= self._clock():
            logger.debug(f"[{self.__class__.__name__}] Cache entry expired: {key}")
            del self._entries[key]
            self.misses += 1
            return None
        self.hits += 1
        logger.debug(f"[{self.__class__.__name__}] Cache hit: {key}")
        return entry.payload

    def set(self, key: str, payload: Any) -> None:
        now = self._clock()
        self._purge_expired(now)
        self._entries[key] = CacheEntry(key=key, payload=payload, expires_at=now + self._ttl)

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"[{self.__class__.__name__}] Dropped {len(expired)} expired entries.")

    def __len__(self) -> int:
        return len(self._entries)

    def stats(self) -> Dict[str, Any]:
        total = self.hits + self.misses
        return {
            "entries": len(self._entries),
            "ttl_seconds": self._ttl,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(self.hits / total, 3) if total else 0.0,
        }
