"""Service Host - a local RPC host for small, named units of work.

Requests are POSTed to one HTTP endpoint and routed by the ``X-Service``
header to a registered handler. An optional ``X-Auth-Token`` guards the
host and an optional ``X-Cache-Key`` lets a caller reuse a service's
previous result.

Layers:
    - protocols: Interface contracts (ServiceHandler, ResponseStore)
    - repositories: Storage implementations
    - services: Registry, auth, completion guard, cache and dispatcher
    - handlers: HTTP request/response handling
    - dto: Data transfer objects (dispatcher boundary)
    - entities: Domain models (internal)

Usage:
    ```python
    from service_host import Host, Settings

    host = Host(Settings(port=8080))
    host.add_service({"name": "echo", "handler": lambda data, done: done(None, data)})
    host.run()
    ```
"""

from service_host.config import Settings, get_settings
from service_host.dto import DispatchResult, ServiceRequest
from service_host.entities import CacheEntryEntity, DispatchState, Outcome, Service
from service_host.errors import (
    DuplicateServiceName,
    HandlerError,
    InvalidService,
    ServiceHostError,
    ServiceNotFound,
    Unauthorized,
)
from service_host.handlers import RpcHandler
from service_host.host import Host
from service_host.protocols import CompletionSink, ResponseStore, ServiceHandler
from service_host.repositories import InMemoryResponseRepository
from service_host.services import AuthGuard, CompletionGuard, Dispatcher, ResponseCache, ServiceRegistry

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    # Host
    "Host",
    # Protocols (interfaces)
    "CompletionSink",
    "ResponseStore",
    "ServiceHandler",
    # Services (core)
    "AuthGuard",
    "CompletionGuard",
    "Dispatcher",
    "ResponseCache",
    "ServiceRegistry",
    # Handlers (HTTP)
    "RpcHandler",
    # Repositories (storage)
    "InMemoryResponseRepository",
    # Entities (domain models)
    "CacheEntryEntity",
    "DispatchState",
    "Outcome",
    "Service",
    # DTOs
    "DispatchResult",
    "ServiceRequest",
    # Errors
    "ServiceHostError",
    "InvalidService",
    "DuplicateServiceName",
    "ServiceNotFound",
    "Unauthorized",
    "HandlerError",
]
