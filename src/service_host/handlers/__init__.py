"""Handler layer for HTTP endpoints.

Handlers depend on the dispatcher, never directly on the registry or the
cache.

Architecture:
    Handler -> Dispatcher -> Registry / Cache / Service handlers
    (HTTP)  -> (Routing)  -> (State)
"""

from .rpc_handler import EncodedBody, RpcHandler, decode_payload, encode_result, encode_value

__all__ = [
    "EncodedBody",
    "RpcHandler",
    "decode_payload",
    "encode_result",
    "encode_value",
]
