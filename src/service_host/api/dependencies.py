"""Dependency injection configuration for the FastAPI app.

Uses FastAPI's app.state pattern for storing host components.

Pattern:
    - create_app() stores the host and its RPC handler in app.state
    - The dependency function retrieves the handler from request.app.state
    - No module-level instances: each host gets its own app
"""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from service_host.handlers import RpcHandler


def get_handler(request: Request) -> RpcHandler:
    """Dependency injection for the RpcHandler from app.state.

    Raises:
        RuntimeError: If the handler is not initialized
    """
    handler = getattr(request.app.state, "rpc_handler", None)
    if handler is None:
        raise RuntimeError("RpcHandler not initialized. Build the app with create_app().")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for the host app.

    Prints the startup and shutdown banners when ``output_on_listen`` is
    set. Cached responses outlive the app, so a host that listens again
    still serves them.

    Args:
        app: The FastAPI application instance

    Yields:
        None
    """
    host = app.state.host
    settings = host.settings

    if settings.output_on_listen:
        print(f"✓ Service host listening at {host.get_url()}")
        print(f"✓ Services: {', '.join(host.registry.names()) or '(none)'}")
        print(f"✓ Auth: {'enabled' if host.auth.enabled else 'disabled'}")
        print(f"✓ Cache TTL: {settings.cache_ttl if settings.cache_ttl is not None else 'unbounded'}")

    yield

    if settings.output_on_listen:
        print("✓ Service host shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[RpcHandler, Depends(get_handler)]
