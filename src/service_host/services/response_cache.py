"""Response cache service.

Applies the time-to-live policy on top of a ResponseStore and keeps hit and
miss counters. Only the dispatcher writes to it, and only with success
values.
"""

import threading
import time
from typing import Any, Callable

from service_host.config import get_settings
from service_host.entities import CacheEntryEntity
from service_host.protocols import ResponseStore
from service_host.repositories import InMemoryResponseRepository


class ResponseCache:
    """Keyed time-to-live cache for handler results.

    Example:
        ```python
        cache = ResponseCache.create(ttl=30)
        cache.put("resize", "avatar-42", b"...")
        entry = cache.get("resize", "avatar-42")
        if entry is not None:
            body = entry.value
        ```
    """

    def __init__(
        self,
        repository: ResponseStore,
        ttl: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the response cache.

        Args:
            repository: Storage backend (required).
            ttl: Default lifetime in seconds. None means entries never expire.
            clock: Monotonic time source, replaceable in tests.
        """
        if ttl is not None and ttl <= 0:
            raise ValueError("ttl must be positive or None")
        self._repository = repository
        self._ttl = ttl
        self._clock = clock
        self._hits = 0
        self._misses = 0
        self._stats_lock = threading.Lock()

    @classmethod
    def create(
        cls,
        repository: ResponseStore | None = None,
        ttl: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> "ResponseCache":
        """Factory method with an in-memory repository by default.

        Args:
            repository: Storage backend. If None, an in-memory one is created.
            ttl: Default lifetime in seconds. If None, uses settings.
            clock: Monotonic time source.

        Returns:
            Configured ResponseCache instance
        """
        return cls(
            repository=repository or InMemoryResponseRepository.create(),
            ttl=ttl if ttl is not None else get_settings().cache_ttl,
            clock=clock,
        )

    def get(self, service_name: str, cache_key: str) -> CacheEntryEntity | None:
        """Look up a live entry.

        Args:
            service_name: The service the value belongs to
            cache_key: The caller-supplied cache key

        Returns:
            The entry (its ``value`` is the cached result) or None on a miss
        """
        entry = self._repository.load(service_name, cache_key, self._clock())
        with self._stats_lock:
            if entry is None:
                self._misses += 1
            else:
                self._hits += 1
        return entry

    def put(
        self,
        service_name: str,
        cache_key: str,
        value: Any,
        ttl: float | None = None,
    ) -> CacheEntryEntity:
        """Store a value, replacing and re-aging any previous entry.

        Args:
            service_name: The service that produced the value
            cache_key: The caller-supplied cache key
            value: The handler's success value
            ttl: Entry-specific lifetime; defaults to the cache's ttl

        Returns:
            The stored entry
        """
        entry = CacheEntryEntity(
            service_name=service_name,
            cache_key=cache_key,
            value=value,
            created_at=self._clock(),
            ttl=ttl if ttl is not None else self._ttl,
        )
        self._repository.save(entry)
        return entry

    def purge_expired(self) -> int:
        """Eagerly drop expired entries. Lookups never need this."""
        return self._repository.purge_expired(self._clock())

    def clear(self) -> int:
        """Clear all entries and reset the counters.

        Returns:
            Number of entries deleted
        """
        with self._stats_lock:
            self._hits = 0
            self._misses = 0
        return self._repository.clear_all()

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with entry count, hit/miss counters and default ttl
        """
        with self._stats_lock:
            hits, misses = self._hits, self._misses
        return {
            "total_entries": self._repository.count_all(),
            "hits": hits,
            "misses": misses,
            "ttl": self._ttl,
        }

    @property
    def ttl(self) -> float | None:
        """Get the default entry lifetime in seconds."""
        return self._ttl

    @property
    def repository(self) -> ResponseStore:
        """Get the underlying repository (for testing)."""
        return self._repository
