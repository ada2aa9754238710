"""In-memory implementation of ResponseStore.

Entries live in a dict keyed by ``(service_name, cache_key)``. Expiry is
lazy: an expired entry is dropped the first time a lookup sees it.
"""

import threading

from service_host.entities import CacheEntryEntity


class InMemoryResponseRepository:
    """Process-local response store.

    This class satisfies the ResponseStore protocol through structural
    typing. Every read-modify sequence runs under a lock so a handler
    finishing on a worker thread can never expose a half-applied save.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], CacheEntryEntity] = {}
        self._lock = threading.Lock()

    @classmethod
    def create(cls) -> "InMemoryResponseRepository":
        """Factory method, mirrors the other repositories' constructors."""
        return cls()

    def load(self, service_name: str, cache_key: str, now: float) -> CacheEntryEntity | None:
        key = (service_name, cache_key)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(now):
                del self._entries[key]
                return None
            return entry

    def save(self, entry: CacheEntryEntity) -> None:
        with self._lock:
            self._entries[entry.key] = entry

    def purge_expired(self, now: float) -> int:
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]
            return len(expired)

    def clear_all(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count

    def count_all(self) -> int:
        with self._lock:
            return len(self._entries)
