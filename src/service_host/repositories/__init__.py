"""Repository layer for data access.

Repositories satisfy the protocols in ``service_host.protocols`` through
structural typing, not inheritance.
"""

from service_host.protocols import ResponseStore

from .memory_repository import InMemoryResponseRepository

__all__ = [
    "InMemoryResponseRepository",
    "ResponseStore",
]
