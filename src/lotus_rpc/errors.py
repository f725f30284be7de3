"""Lotus RPC errors."""

from __future__ import annotations

from typing import Any

import httpx

UNKNOWN_RPC_ERROR = "Unknown jsonrpc error"

# The transport's own failure type, surfaced as-is.
TransportError = httpx.HTTPError


class LotusRPCError(RuntimeError):
    """Base class for errors raised by the Lotus RPC client."""


class ConfigurationError(LotusRPCError):
    """Raised when connection settings are missing or invalid."""


class RpcError(LotusRPCError):
    """Raised when the node answers with a JSON-RPC ``error`` object."""

    def __init__(self, message: str, *, code: int | None = None, data: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data


__all__ = [
    "ConfigurationError",
    "LotusRPCError",
    "RpcError",
    "TransportError",
    "UNKNOWN_RPC_ERROR",
]
