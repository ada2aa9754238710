"""Response DTOs."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from service_host.entities import DispatchState


class DispatchResult(BaseModel):
    """Result of dispatching one request.

    ``body`` is the handler value on success or a cache hit, and the error
    text or fixed literal on failure.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    state: DispatchState = Field(..., description="Terminal state the request reached")
    status_code: int = Field(..., description="HTTP status to answer with")
    body: Any = Field(None, description="Response body before serialization")
    cache_hit: bool = Field(False, description="Whether the body was served from cache")

    @property
    def ok(self) -> bool:
        return self.state is DispatchState.DONE


class CacheStatsResponse(BaseModel):
    """Response cache statistics."""

    total_entries: int = Field(..., description="Stored entries, expired ones included", ge=0)
    hits: int = Field(..., description="Lookups answered from cache", ge=0)
    misses: int = Field(..., description="Lookups that found no live entry", ge=0)
    ttl_seconds: float | None = Field(None, description="Default entry lifetime, None = never expires")
