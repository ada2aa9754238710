"""The service host: owns the registry, cache, auth guard and dispatcher."""

import asyncio
from typing import Any, Callable, Iterable, Mapping

import uvicorn
from fastapi import FastAPI

from service_host.api.app import create_app
from service_host.config import Settings, configure_logging, get_settings
from service_host.dto import CacheStatsResponse
from service_host.entities import Service
from service_host.handlers import encode_value
from service_host.repositories import InMemoryResponseRepository
from service_host.services import AuthGuard, Dispatcher, ResponseCache, ServiceRegistry

ServiceDefinition = Service | Mapping[str, Any]


class Host:
    """A process-local RPC host.

    Each host owns its own state; two hosts in one process share nothing.

    Example:
        ```python
        host = Host(Settings(port=8080, auth_token="s3cret"))

        @host.service("echo")
        def echo(data, done):
            done(None, data)

        host.run()
        ```
    """

    def __init__(
        self,
        settings: Settings | None = None,
        services: Iterable[ServiceDefinition] = (),
    ) -> None:
        """Initialize the host.

        Args:
            settings: Host configuration. Defaults to environment settings.
            services: Services to register right away.

        Raises:
            DuplicateServiceName: If two initial services share a name.
        """
        self.settings = settings or get_settings()
        self.registry = ServiceRegistry()
        self.cache = ResponseCache(
            repository=InMemoryResponseRepository.create(),
            ttl=self.settings.cache_ttl,
        )
        self.auth = AuthGuard(self.settings.auth_token)
        self.dispatcher = Dispatcher(
            registry=self.registry,
            cache=self.cache,
            auth=self.auth,
            silent=self.settings.silent,
            encoder=encode_value,
        )
        self._app: FastAPI | None = None
        self._server: uvicorn.Server | None = None
        self._serve_task: asyncio.Task | None = None

        for definition in services:
            self.add_service(definition)

    def add_service(self, definition: ServiceDefinition) -> Service:
        """Register a service.

        Args:
            definition: A Service, or a mapping with ``name`` and ``handler``

        Returns:
            The registered Service

        Raises:
            InvalidService: If the definition is malformed.
            DuplicateServiceName: If the name is already registered.
        """
        service = definition if isinstance(definition, Service) else Service.from_mapping(definition)
        self.registry.register(service)
        return service

    def service(self, name: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator form of add_service."""

        def decorator(handler: Callable[..., Any]) -> Callable[..., Any]:
            self.add_service(Service(name=name, handler=handler))
            return handler

        return decorator

    def get_url(self) -> str:
        return self.settings.url

    async def call_service(self, name: str, data: Any = None) -> Any:
        """Call a service in-process, without HTTP, auth or caching.

        Raises:
            ServiceNotFound: If no service has that name.
            HandlerError: If the handler reports a failure.
        """
        return await self.dispatcher.call(name, data)

    def cache_stats(self) -> CacheStatsResponse:
        stats = self.cache.get_stats()
        return CacheStatsResponse(
            total_entries=stats["total_entries"],
            hits=stats["hits"],
            misses=stats["misses"],
            ttl_seconds=stats["ttl"],
        )

    @property
    def app(self) -> FastAPI:
        """The FastAPI app serving this host, built on first access."""
        if self._app is None:
            self._app = create_app(self)
        return self._app

    def _server_config(self) -> uvicorn.Config:
        return uvicorn.Config(
            self.app,
            host=self.settings.address,
            port=self.settings.port,
            log_level="critical" if self.settings.silent else self.settings.log_level.lower(),
            access_log=not self.settings.silent,
        )

    @property
    def is_listening(self) -> bool:
        return self._server is not None and self._server.started

    async def listen(self) -> None:
        """Start serving in a background task and wait until bound."""
        if self._serve_task is not None:
            raise RuntimeError(f"Host is already listening at {self.get_url()}")

        configure_logging(self.settings.log_level)
        self._server = uvicorn.Server(self._server_config())
        self._serve_task = asyncio.create_task(self._server.serve())

        while not self._server.started:
            if self._serve_task.done():
                task, self._serve_task, self._server = self._serve_task, None, None
                task.result()
                raise RuntimeError(f"Host stopped before listening at {self.get_url()}")
            await asyncio.sleep(0.01)

    async def stop_listening(self) -> None:
        """Ask the server to exit and wait for it to shut down."""
        if self._server is None or self._serve_task is None:
            return
        self._server.should_exit = True
        try:
            await self._serve_task
        finally:
            self._server = None
            self._serve_task = None

    def run(self) -> None:
        """Serve in the foreground until interrupted."""
        configure_logging(self.settings.log_level)
        uvicorn.Server(self._server_config()).run()
