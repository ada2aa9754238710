"""Request DTOs."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ServiceRequest(BaseModel):
    """Per-call request context.

    Built by the HTTP handler from the ``X-Service``, ``X-Cache-Key`` and
    ``X-Auth-Token`` headers plus the decoded body, and consumed once by the
    dispatcher.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    service_name: str | None = Field(None, description="Name of the service to invoke")
    cache_key: str | None = Field(
        None,
        description="Opts the call into caching, scoped to the named service",
    )
    auth_token: str | None = Field(None, description="Shared-secret token, if any")
    payload: Any = Field(default_factory=dict, description="Opaque input forwarded to the handler")
