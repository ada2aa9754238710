"""Terminal states of a dispatched request."""

from enum import Enum


class DispatchState(str, Enum):
    """Where a request ended up inside the dispatcher.

    Only ``DONE`` answers with the service's value; the others end the
    request early with 401, 404 and 500.
    """

    DONE = "done"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    HANDLER_ERROR = "handler_error"
