"""Domain entities for internal representation.

These are frozen dataclasses used by services and repositories. They are
not the HTTP contract; see the dto package for that.
"""

from .cache_entry import CacheEntryEntity
from .dispatch_state import DispatchState
from .outcome import Outcome
from .service import Service

__all__ = ["CacheEntryEntity", "DispatchState", "Outcome", "Service"]
