"""Service handler protocol.

A handler receives the decoded request payload and a completion sink. It
reports its outcome by calling the sink exactly once, either immediately or
later (from a callback, a task or another thread):

    ```python
    def echo(data, done):
        done(None, data)

    async def slow_echo(data, done):
        await asyncio.sleep(0.1)
        done(None, data)
    ```
"""

from typing import Any, Awaitable, Protocol, runtime_checkable


@runtime_checkable
class CompletionSink(Protocol):
    """Callable a handler uses to report its outcome.

    Only the first call counts. A truthy ``error`` marks a failure,
    otherwise ``value`` is the result.
    """

    def __call__(self, error: Any = None, value: Any = None) -> None:
        ...


@runtime_checkable
class ServiceHandler(Protocol):
    """Protocol for service handlers.

    Plain functions and coroutine functions both satisfy it; a returned
    awaitable is awaited by the completion guard.
    """

    def __call__(self, data: Any, done: CompletionSink) -> Awaitable[None] | None:
        ...
