"""Protocol interfaces for swappable implementations.

Protocols let the services depend on contracts rather than concrete
classes, so tests can plug in fakes and storage can be swapped without
touching the dispatcher.
"""

from .response_store import ResponseStore
from .service_handler import CompletionSink, ServiceHandler

__all__ = [
    "CompletionSink",
    "ResponseStore",
    "ServiceHandler",
]
