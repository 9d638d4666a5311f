import copy
import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from cachetools import TLRUCache

logger = logging.getLogger(__name__)

KEY_SEPARATOR = ":"


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    inserted_at: float
    ttl: float


def cache_key(namespace: str, *parts: Any) -> str:
    """
    Build a deterministic cache key from an operation name and every
    parameter that affects its result. ``None`` renders as an empty segment.
    """
    segments = [namespace]
    segments.extend("" if part is None else str(part) for part in parts)
    return KEY_SEPARATOR.join(segments)


class ResponseCache:
    """
    Process-local key/value store with a fixed time-to-live.

    Values are deep-copied on the way in and on the way out, so a cached
    response can never be mutated by a caller. Expired entries are dropped
    lazily the next time the store is touched. There is no capacity bound
    by default; memory grows with the number of distinct keys seen inside
    one TTL window.
    """

    def __init__(
        self,
        ttl_seconds: float,
        maxsize: float = math.inf,
        timer: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self.timer = timer
        # cachetools expires at now >= ttu; an entry must still be served at
        # exactly inserted_at + ttl, so expire on the next representable instant
        self._store = TLRUCache(
            maxsize=maxsize,
            ttu=lambda _key, entry, now: math.nextafter(now + entry.ttl, math.inf),
            timer=timer,
        )

    def get(self, key: str) -> Optional[Any]:
        entry = self._store.get(key)
        if entry is None:
            return None
        return copy.deepcopy(entry.value)

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        self._store[key] = CacheEntry(
            value=copy.deepcopy(value),
            inserted_at=self.timer(),
            ttl=self.ttl_seconds if ttl is None else ttl,
        )

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def clear(self) -> None:
        self._store.clear()

    def shutdown(self) -> None:
        logger.info(f"Dropping {len(self._store)} cached responses")
        self.clear()

    def __len__(self) -> int:
        self._store.expire()
        return len(self._store)

    async def get_or_set(
        self, key: str, loader: Callable[[], Awaitable[Any]]
    ) -> Any:
        """Read-through: return the cached copy, or await ``loader`` and store it."""
        cached = self.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            return cached

        logger.debug(f"Cache miss for {key}")
        value = await loader()
        self.set(key, value)
        return value
