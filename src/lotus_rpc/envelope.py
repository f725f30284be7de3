"""JSON-RPC envelope helpers for the Lotus client."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .errors import UNKNOWN_RPC_ERROR, RpcError

NAMESPACE = "Filecoin"
JSONRPC_VERSION = "2.0"
REQUEST_ID = 1

CONTENT_TYPE = "text/plain;charset=UTF-8"
ACCEPT = "*/*"


def remove_empty_headers(headers: Mapping[str, Any]) -> dict[str, Any]:
    """Drop header entries whose value is falsy (``""``, ``None``, ``False``, ``0``)."""
    return {key: value for key, value in headers.items() if value}


def build_request(method: str, params: Iterable[Any] = ()) -> dict[str, Any]:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "method": f"{NAMESPACE}.{method}",
        "params": list(params),
        "id": REQUEST_ID,
    }


def build_headers(token: str | None) -> dict[str, str]:
    return remove_empty_headers(
        {
            "Content-Type": CONTENT_TYPE,
            "Accept": ACCEPT,
            "Authorization": f"Bearer {token}" if token else None,
        }
    )


def throw_if_errors(response: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return ``response`` untouched unless it carries a JSON-RPC error.

    The ``error`` key takes precedence over ``result`` whenever both are
    present. The raised :class:`RpcError` uses the server message when it is
    a non-empty string and falls back to ``UNKNOWN_RPC_ERROR`` otherwise.
    """
    error = response.get("error")
    # An empty error object still counts as an error.
    if error is None or (not error and not isinstance(error, (Mapping, list))):
        return response

    message: Any = None
    code: Any = None
    if isinstance(error, Mapping):
        message = error.get("message")
        code = error.get("code")
    if not isinstance(message, str) or not message:
        message = UNKNOWN_RPC_ERROR
    raise RpcError(message, code=code if isinstance(code, int) else None, data=error)


__all__ = [
    "ACCEPT",
    "CONTENT_TYPE",
    "JSONRPC_VERSION",
    "NAMESPACE",
    "REQUEST_ID",
    "build_headers",
    "build_request",
    "remove_empty_headers",
    "throw_if_errors",
]
