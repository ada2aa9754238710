"""HTTP handler for the host's single RPC endpoint.

The handler converts between HTTP and the dispatcher's DTOs. It owns the
transport concerns: reading headers, decoding the body and serializing the
result. Routing, auth and caching live in the dispatcher.
"""

import json
from dataclasses import dataclass
from typing import Any

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from service_host.dto import DispatchResult, ServiceRequest
from service_host.services import Dispatcher

SERVICE_HEADER = "X-Service"
CACHE_KEY_HEADER = "X-Cache-Key"
AUTH_TOKEN_HEADER = "X-Auth-Token"


class InvalidBody(ValueError):
    """The request body could not be decoded as its content type claims."""


def decode_payload(body: bytes, content_type: str | None) -> Any:
    """Decode a request body into the handler payload.

    An empty body becomes an empty dict, JSON is parsed, ``text/*`` is
    decoded to str and anything else is passed through as bytes.

    Raises:
        InvalidBody: If a JSON or text body cannot be decoded.
    """
    if not body:
        return {}

    media_type, _, params = (content_type or "").partition(";")
    media_type = media_type.strip().lower()

    if media_type == "application/json" or media_type.endswith("+json"):
        try:
            return json.loads(body)
        except ValueError as e:
            raise InvalidBody(f"Invalid JSON body: {e}") from e

    if media_type.startswith("text/"):
        charset = "utf-8"
        for param in params.split(";"):
            name, _, value = param.partition("=")
            if name.strip().lower() == "charset" and value.strip():
                charset = value.strip().strip('"')
        try:
            return body.decode(charset)
        except (LookupError, UnicodeDecodeError) as e:
            raise InvalidBody(f"Invalid text body: {e}") from e

    return body


@dataclass(frozen=True)
class EncodedBody:
    """A value already rendered to its wire form."""

    content: bytes
    media_type: str | None = None


def encode_value(value: Any) -> EncodedBody:
    """Render a value the way the endpoint sends it.

    str values are sent as text, bytes as an octet stream, None as an empty
    body and everything else as JSON (so ``1`` is sent as ``1``).

    Raises:
        ValueError: If the value cannot be JSON encoded (NaN, unknown types).
        TypeError: If the value cannot be JSON encoded.
    """
    if isinstance(value, EncodedBody):
        return value
    if isinstance(value, str):
        return EncodedBody(value.encode("utf-8"), "text/plain")
    if isinstance(value, (bytes, bytearray)):
        return EncodedBody(bytes(value), "application/octet-stream")
    if value is None:
        return EncodedBody(b"")
    return EncodedBody(JSONResponse(jsonable_encoder(value)).body, "application/json")


def encode_result(result: DispatchResult) -> Response:
    """Serialize a dispatch result into an HTTP response."""
    body = encode_value(result.body)
    return Response(body.content, status_code=result.status_code, media_type=body.media_type)


class RpcHandler:
    """HTTP handler for ``POST /``.

    Example:
        ```python
        handler = RpcHandler(dispatcher=dispatcher)

        @app.post("/")
        async def rpc(request: Request) -> Response:
            return await handler.handle(request)
        ```
    """

    def __init__(self, dispatcher: Dispatcher) -> None:
        """Initialize the RPC handler.

        Args:
            dispatcher: The dispatcher that routes requests (required).
        """
        self._dispatcher = dispatcher

    async def build_request(self, request: Request) -> ServiceRequest:
        """Read the routing headers and body into a ServiceRequest.

        Raises:
            InvalidBody: If the body does not match its content type.
        """
        headers = request.headers
        payload = decode_payload(await request.body(), headers.get("content-type"))

        return ServiceRequest(
            service_name=headers.get(SERVICE_HEADER) or None,
            cache_key=headers.get(CACHE_KEY_HEADER) or None,
            auth_token=headers.get(AUTH_TOKEN_HEADER),
            payload=payload,
        )

    async def handle(self, request: Request) -> Response:
        """Handle one RPC call.

        Returns:
            200 with the service value, 401 ``Unauthorized``, 404
            ``Not found``, 500 with the handler's error text, or 400 when
            an authorized caller sends a body that cannot be decoded
        """
        try:
            service_request = await self.build_request(request)
        except InvalidBody as e:
            rejected = self._dispatcher.authenticate(request.headers.get(AUTH_TOKEN_HEADER))
            if rejected is not None:
                return encode_result(rejected)
            return PlainTextResponse(str(e), status_code=status.HTTP_400_BAD_REQUEST)

        result = await self._dispatcher.dispatch(service_request)
        return encode_result(result)
