from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.responses import Response

from service_host.api.dependencies import HandlerDep, lifespan
from service_host.handlers import RpcHandler

if TYPE_CHECKING:
    from service_host.host import Host


def create_app(host: "Host") -> FastAPI:
    """Build the HTTP app for one host.

    Args:
        host: The host whose dispatcher serves the endpoint

    Returns:
        A FastAPI app exposing ``POST /``
    """
    app = FastAPI(
        title="Service Host",
        description="Routes POST requests to named services via the X-Service header",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.host = host
    app.state.rpc_handler = RpcHandler(dispatcher=host.dispatcher)

    @app.post("/")
    async def rpc(request: Request, handler: HandlerDep) -> Response:
        """Dispatch to the service named in X-Service."""
        return await handler.handle(request)

    return app
