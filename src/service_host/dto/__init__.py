"""Data Transfer Objects for the dispatcher boundary.

These Pydantic models carry a request into the dispatcher and its result
back out to the HTTP layer.
"""

from .requests import ServiceRequest
from .responses import CacheStatsResponse, DispatchResult

__all__ = [
    "CacheStatsResponse",
    "DispatchResult",
    "ServiceRequest",
]
