"""Service registry: the name to service mapping owned by a host."""

from typing import Any, Callable

from service_host.entities import Service
from service_host.errors import DuplicateServiceName, ServiceNotFound


class ServiceRegistry:
    """Holds every registered service, keyed by exact name.

    Written at startup, read by the dispatcher on every request. Names are
    case-sensitive and never overwritten.
    """

    def __init__(self) -> None:
        self._services: dict[str, Service] = {}

    def register(self, service: Service) -> None:
        """Register a service.

        Args:
            service: The service to add

        Raises:
            DuplicateServiceName: If the name is already taken. The existing
                service stays registered.
        """
        if service.name in self._services:
            raise DuplicateServiceName(service.name)
        self._services[service.name] = service

    def add(self, name: str, handler: Callable[..., Any]) -> Service:
        """Build, validate and register a service in one step."""
        service = Service(name=name, handler=handler)
        self.register(service)
        return service

    def resolve(self, name: str | None) -> Service:
        """Return the service registered under ``name``.

        Raises:
            ServiceNotFound: If the name is empty, absent or unknown.
        """
        service = self._services.get(name) if name else None
        if service is None:
            raise ServiceNotFound(name)
        return service

    def names(self) -> list[str]:
        return sorted(self._services)

    def __contains__(self, name: object) -> bool:
        return name in self._services

    def __len__(self) -> int:
        return len(self._services)
