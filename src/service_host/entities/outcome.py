"""Handler outcome domain entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Outcome:
    """The settled result of one handler invocation.

    Attributes:
        error: Failure value; truthy means the invocation failed
        value: Success value, ignored when ``error`` is set
    """

    error: Any = None
    value: Any = None

    @property
    def failed(self) -> bool:
        return bool(self.error)
