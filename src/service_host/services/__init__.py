"""Service layer: the dispatcher and the components it ties together.

Architecture:
    Handler -> Dispatcher -> AuthGuard / ServiceRegistry / ResponseCache
    (HTTP)  -> (Routing)  -> CompletionGuard -> service handler

Usage:
    ```python
    from service_host.services import (
        AuthGuard, Dispatcher, ResponseCache, ServiceRegistry,
    )

    registry = ServiceRegistry()
    registry.add("echo", lambda data, done: done(None, data))
    dispatcher = Dispatcher(registry, ResponseCache.create(), AuthGuard())
    ```
"""

from .auth import AuthGuard
from .completion import CompletionGuard
from .dispatcher import Dispatcher
from .registry import ServiceRegistry
from .response_cache import ResponseCache

__all__ = [
    "AuthGuard",
    "CompletionGuard",
    "Dispatcher",
    "ResponseCache",
    "ServiceRegistry",
]
