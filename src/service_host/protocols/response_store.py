"""Response storage protocol.

Defines the interface for any backend that can hold handler results keyed
by ``(service_name, cache_key)``. The default implementation is the
in-memory repository; stores are process-local.
"""

from typing import Protocol, runtime_checkable

from service_host.entities import CacheEntryEntity


@runtime_checkable
class ResponseStore(Protocol):
    """Protocol for response cache storage backends.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed.
    """

    def load(self, service_name: str, cache_key: str, now: float) -> CacheEntryEntity | None:
        """Load a live entry.

        Args:
            service_name: The service the entry belongs to
            cache_key: The caller-supplied cache key
            now: Current monotonic time in seconds

        Returns:
            The entry if present and unexpired, None otherwise
        """
        ...

    def save(self, entry: CacheEntryEntity) -> None:
        """Store an entry, replacing any entry with the same key.

        Args:
            entry: The entry to store
        """
        ...

    def purge_expired(self, now: float) -> int:
        """Drop every expired entry.

        Args:
            now: Current monotonic time in seconds

        Returns:
            Number of entries removed
        """
        ...

    def clear_all(self) -> int:
        """Clear all entries.

        Returns:
            Number of entries deleted
        """
        ...

    def count_all(self) -> int:
        """Count stored entries, expired or not.

        Returns:
            Number of stored entries
        """
        ...
