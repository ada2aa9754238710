"""Error hierarchy for the service host.

Registration errors are raised synchronously and are fatal to the call that
raised them. Per-request errors carry the HTTP status and the literal body
the dispatcher answers with; they never escape a single request.
"""

from typing import Any


class ServiceHostError(Exception):
    """Base exception for all service host errors."""

    http_status: int = 500

    @property
    def body(self) -> str:
        """Text written as the response body for this error."""
        return str(self)


class InvalidService(ServiceHostError):
    """A service definition is malformed (empty name, non-callable handler)."""


class DuplicateServiceName(ServiceHostError):
    """A service with the same name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f'A service has already been defined with the name "{name}"')
        self.name = name


class ServiceNotFound(ServiceHostError):
    """No service is registered under the requested name."""

    http_status = 404

    def __init__(self, name: str | None) -> None:
        super().__init__(f"No service registered with the name {name!r}")
        self.name = name

    @property
    def body(self) -> str:
        return "Not found"


class Unauthorized(ServiceHostError):
    """The request did not carry the configured auth token."""

    http_status = 401

    def __init__(self) -> None:
        super().__init__("Unauthorized")


class HandlerError(ServiceHostError):
    """A handler reported a failure through its completion sink.

    Attributes:
        service_name: The service whose handler failed.
        error: The failure value exactly as passed to the sink.
    """

    http_status = 500

    def __init__(self, service_name: str, error: Any) -> None:
        super().__init__(str(error))
        self.service_name = service_name
        self.error = error
