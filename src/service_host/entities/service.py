"""Service domain entity."""

from dataclasses import dataclass
from typing import Any, Callable

from service_host.errors import InvalidService


@dataclass(frozen=True)
class Service:
    """A named unit of work.

    Attributes:
        name: Unique, case-sensitive service name
        handler: Callable of ``(data, done)``; see ``protocols.ServiceHandler``
    """

    name: str
    handler: Callable[..., Any]

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise InvalidService(f"Service name must be a non-empty string, got {self.name!r}")
        if not callable(self.handler):
            raise InvalidService(f'Handler for service "{self.name}" is not callable')

    @classmethod
    def from_mapping(cls, definition: dict[str, Any]) -> "Service":
        """Build a service from a ``{"name": ..., "handler": ...}`` mapping."""
        try:
            return cls(name=definition["name"], handler=definition["handler"])
        except KeyError as e:
            raise InvalidService(f"Service definition is missing {e.args[0]!r}") from e
