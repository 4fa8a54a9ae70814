"""In-memory TTL cache for resolved engine records.

Each entity kind (modules, SDK versions, API references, migration guides,
compatibility matrices) gets its own cache instance. Expiry is checked
lazily on read; there is no background eviction.
"""

import time
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 60 * 60


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A cached value with the clock reading taken when it was stored."""

    value: T
    inserted_at: float


class TTLCache(Generic[T]):
    """Keyed store whose entries are valid for a fixed time-to-live.

    ``set`` overwrites any previous entry for the key, so concurrent writers
    simply race and the last one wins.

    Attributes:
        name: Label used in ``info()`` output.
        ttl_seconds: Lifetime of an entry. ``None`` disables expiry.
    """

    def __init__(
        self,
        name: str,
        ttl_seconds: Optional[float] = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            name: Label for this cache (e.g. "modules").
            ttl_seconds: Entry lifetime in seconds, or None for no expiry.
            clock: Monotonic time source. Tests inject a fake clock.
        """
        self.name = name
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = {}

    def get(self, key: str) -> Optional[T]:
        """Return the cached value for ``key`` if present and fresh.

        Args:
            key: Cache key.

        Returns:
            The stored value, or None on a miss or expired entry.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self.ttl_seconds is not None:
            age = self._clock() - entry.inserted_at
            if age >= self.ttl_seconds:
                return None

        return entry.value

    def set(self, key: str, value: T) -> None:
        """Store ``value`` under ``key`` stamped with the current time.

        Args:
            key: Cache key.
            value: Value to store. Replaces any previous entry.
        """
        self._entries[key] = CacheEntry(value=value, inserted_at=self._clock())

    def clear(self, key: Optional[str] = None) -> None:
        """Remove one entry, or every entry when no key is given."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def info(self) -> dict:
        """Return cache statistics.

        Returns:
            Dictionary with the cache name, ttl, total and fresh entry counts.
        """
        fresh = sum(1 for key in self._entries if self.get(key) is not None)
        return {
            "name": self.name,
            "ttl_seconds": self.ttl_seconds,
            "count": len(self._entries),
            "fresh": fresh,
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
