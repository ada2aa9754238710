"""Request dispatcher.

Runs one request through the host's state machine:

    authenticate -> resolve -> check cache -> invoke (on miss)
                 -> encode -> store (with a cache key) -> done

Auth failure, unknown service and handler failure end the request early
with 401, 404 and 500. A success value the encoder rejects is a handler
failure too, and is never cached. Every per-request error is turned into
a DispatchResult here; nothing escapes to the transport.
"""

import logging
from typing import Any, Callable

from service_host.dto import DispatchResult, ServiceRequest
from service_host.entities import DispatchState, Outcome
from service_host.errors import HandlerError, ServiceHostError, ServiceNotFound, Unauthorized
from service_host.services.auth import AuthGuard
from service_host.services.completion import CompletionGuard
from service_host.services.registry import ServiceRegistry
from service_host.services.response_cache import ResponseCache

logger = logging.getLogger(__name__)


class Dispatcher:
    """Routes requests to registered services.

    Concurrent requests for the same service and cache key are not
    coalesced: each one that misses the cache runs the handler.
    """

    def __init__(
        self,
        registry: ServiceRegistry,
        cache: ResponseCache,
        auth: AuthGuard,
        silent: bool = False,
        encoder: Callable[[Any], Any] | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            registry: Services to route to (required).
            cache: Response cache consulted when a cache key is present (required).
            auth: Token check run before anything else (required).
            silent: Suppress logging of handler failures.
            encoder: Renders a success value to its wire form before it is
                cached and returned. Raises TypeError or ValueError for
                values it cannot render. None keeps values as they are.
        """
        self._registry = registry
        self._cache = cache
        self._auth = auth
        self._silent = silent
        self._encoder = encoder

    def authenticate(self, token: str | None) -> DispatchResult | None:
        """Run the auth check alone.

        Returns:
            The 401 result when the token is rejected, else None
        """
        try:
            self._auth.authorize(token)
        except Unauthorized as e:
            return self._reject(DispatchState.UNAUTHORIZED, e)
        return None

    async def dispatch(self, request: ServiceRequest) -> DispatchResult:
        """Handle one request end to end.

        Args:
            request: The request context built by the transport

        Returns:
            DispatchResult with the terminal state, status code and body
        """
        rejected = self.authenticate(request.auth_token)
        if rejected is not None:
            return rejected

        try:
            service = self._registry.resolve(request.service_name)
        except ServiceNotFound as e:
            return self._reject(DispatchState.NOT_FOUND, e)

        if request.cache_key is not None:
            entry = self._cache.get(service.name, request.cache_key)
            if entry is not None:
                return DispatchResult(
                    state=DispatchState.DONE,
                    status_code=200,
                    body=entry.value,
                    cache_hit=True,
                )

        outcome = await CompletionGuard().invoke(service.handler, request.payload)
        if outcome.failed:
            return self._fail(service.name, outcome.error)

        body = outcome.value
        if self._encoder is not None:
            try:
                body = self._encoder(body)
            except (TypeError, ValueError) as e:
                return self._fail(service.name, e)

        if request.cache_key is not None:
            self._cache.put(service.name, request.cache_key, body)

        return DispatchResult(state=DispatchState.DONE, status_code=200, body=body)

    def _fail(self, service_name: str, cause: Any) -> DispatchResult:
        error = HandlerError(service_name, cause)
        if not self._silent:
            logger.error(
                "Service %r failed: %s",
                service_name,
                error,
                exc_info=cause if isinstance(cause, BaseException) else None,
            )
        return self._reject(DispatchState.HANDLER_ERROR, error)

    @staticmethod
    def _reject(state: DispatchState, error: ServiceHostError) -> DispatchResult:
        return DispatchResult(state=state, status_code=error.http_status, body=error.body)

    async def call(self, name: str, data: Any = None) -> Any:
        """Invoke a service in-process, bypassing auth and cache.

        Args:
            name: The service name
            data: Payload passed to the handler; defaults to an empty dict

        Returns:
            The handler's success value

        Raises:
            ServiceNotFound: If no service has that name.
            HandlerError: If the handler reports a failure.
        """
        service = self._registry.resolve(name)
        outcome: Outcome = await CompletionGuard().invoke(
            service.handler,
            {} if data is None else data,
        )
        if outcome.failed:
            raise HandlerError(service.name, outcome.error)
        return outcome.value
