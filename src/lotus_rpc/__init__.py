"""Minimal JSON-RPC 2.0 client for Lotus (Filecoin) nodes.

`LotusRPCClient` posts ``Filecoin.*`` calls to a single endpoint and returns
the ``result`` of each reply. The pure envelope helpers live in
`envelope.py`, the HTTP capability in `transport.py` and file/environment
settings in `config.py`.
"""

from .client import ClientConfig, LotusRPCClient, RpcClient
from .config import LotusSettings, load_settings
from .envelope import build_headers, build_request, remove_empty_headers, throw_if_errors
from .errors import ConfigurationError, LotusRPCError, RpcError, TransportError
from .transport import HttpxTransport, Transport

__all__ = [
    "ClientConfig",
    "ConfigurationError",
    "HttpxTransport",
    "LotusRPCClient",
    "LotusRPCError",
    "LotusSettings",
    "RpcClient",
    "RpcError",
    "Transport",
    "TransportError",
    "build_headers",
    "build_request",
    "load_settings",
    "remove_empty_headers",
    "throw_if_errors",
]
