"""Once-only completion for a single handler invocation.

The guard hands the handler a ``done(error=None, value=None)`` sink. The
first call settles the invocation; every later call is dropped without an
error. Settling resolves a future the dispatcher awaits, so the sink can be
called synchronously, from a later callback, from a task or from another
thread.
"""

import asyncio
import inspect
import threading
from typing import Any

from service_host.entities import Outcome
from service_host.protocols import ServiceHandler


class CompletionGuard:
    """Wraps one handler invocation and records its first outcome.

    Example:
        ```python
        guard = CompletionGuard()
        outcome = await guard.invoke(handler, {"text": "hi"})
        if outcome.failed:
            ...
        ```
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop or asyncio.get_running_loop()
        self._future: asyncio.Future[Outcome] = self._loop.create_future()
        self._lock = threading.Lock()
        self._settled = False
        self._outcome: Outcome | None = None
        self._task: asyncio.Future | None = None

    @property
    def settled(self) -> bool:
        return self._settled

    @property
    def outcome(self) -> Outcome | None:
        """The frozen outcome, None until the first sink call."""
        return self._outcome

    def done(self, error: Any = None, value: Any = None) -> None:
        """Completion sink. Only the first call has any effect."""
        with self._lock:
            if self._settled:
                return
            self._settled = True
            self._outcome = Outcome(error=error, value=value)

        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is self._loop:
            self._resolve()
        else:
            self._loop.call_soon_threadsafe(self._resolve)

    def _resolve(self) -> None:
        if not self._future.done():
            self._future.set_result(self._outcome)

    def _on_task_done(self, task: asyncio.Future) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.done(exc)

    async def invoke(self, handler: ServiceHandler, data: Any) -> Outcome:
        """Run ``handler(data, done)`` and wait for the first outcome.

        A coroutine handler runs as its own task, so it may keep working after
        settling without delaying the response. An exception raised before
        the handler settles becomes the failure value.

        Args:
            handler: The service handler
            data: The decoded request payload

        Returns:
            The first outcome reported through the sink
        """
        try:
            result = handler(data, self.done)
        except Exception as e:
            self.done(e)
        else:
            if inspect.isawaitable(result):
                self._task = asyncio.ensure_future(result)
                self._task.add_done_callback(self._on_task_done)

        return await self._future
