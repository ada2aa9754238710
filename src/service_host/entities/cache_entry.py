"""Cache entry domain entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a cached handler result.

    Attributes:
        service_name: The service that produced the value
        cache_key: The caller-supplied cache key
        value: The handler's success value
        created_at: Monotonic timestamp (seconds) when the entry was stored
        ttl: Lifetime in seconds, None means the entry never expires
    """

    service_name: str
    cache_key: str
    value: Any
    created_at: float
    ttl: float | None = None

    @property
    def key(self) -> tuple[str, str]:
        """Composite key; service scoping keeps equal cache keys apart."""
        return (self.service_name, self.cache_key)

    def is_expired(self, now: float) -> bool:
        if self.ttl is None:
            return False
        return now - self.created_at >= self.ttl
