"""Shared-secret request authorization."""

import hmac

from service_host.errors import Unauthorized


class AuthGuard:
    """Checks the optional ``X-Auth-Token`` of a request.

    With no token configured every request passes. Otherwise the provided
    token must match exactly; no trimming or case folding is applied.
    """

    def __init__(self, token: str | None = None) -> None:
        self._token = token or None

    @property
    def enabled(self) -> bool:
        return self._token is not None

    def authorize(self, provided_token: str | None) -> None:
        """Raise Unauthorized unless the request may proceed."""
        if self._token is None:
            return
        if provided_token is None or not hmac.compare_digest(
            provided_token.encode("utf-8"), self._token.encode("utf-8")
        ):
            raise Unauthorized()
