"""In-memory TTL cache for GitHub API lookups.

Keeps recent search, user and repository responses for a short time so that
repeated inline queries (Telegram sends one per keystroke) do not spend the
GitHub rate-limit budget. Entries expire lazily: an expired entry is dropped
the next time it is read. There is no capacity bound.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 300.0


class CacheBackend(Protocol):
    """Minimal get/set interface the GitHub client depends on."""

    def get(self, key: str) -> object | None: ...

    def set(self, key: str, value: object) -> None: ...


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    stored_at: float


def make_cache_key(operation: str, parameter: str) -> str:
    """Build composite cache key such as ``search:vscode user:microsoft``."""
    return f"{operation}:{parameter}"


class RepositoryCache(Generic[T]):
    """TTL key/value cache.

    Not thread-safe: all access happens on the bot's event loop.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            ttl_seconds: Lifetime of an entry in seconds.
            clock: Time source, injectable for tests.
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = {}

    def get(self, key: str) -> T | None:
        """Return cached value if it is younger than the TTL.

        Args:
            key: Composite cache key.

        Returns:
            Cached value, or None if absent or expired.
        """
        entry = self._entries.get(key)
        if entry is not None and self._clock() - entry.stored_at < self.ttl_seconds:
            logger.debug(f"Cache hit: {key}")
            return entry.value

        if entry is not None:
            logger.debug(f"Cache entry expired: {key}")
        self._entries.pop(key, None)
        return None

    def set(self, key: str, value: T) -> None:
        """Store value under key, replacing any previous entry."""
        self._entries[key] = CacheEntry(value=value, stored_at=self._clock())
        logger.debug(f"Cached: {key}")

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
