"""Lotus JSON-RPC client."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from types import TracebackType
from typing import Any

from .envelope import build_headers, build_request, throw_if_errors
from .errors import ConfigurationError, RpcError
from .transport import DEFAULT_TIMEOUT_SECONDS, HttpxTransport, Transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Connection settings for a single Lotus node."""

    api_address: str
    token: str | None = None


class LotusRPCClient:
    """Calls ``Filecoin.*`` methods on a Lotus node over HTTP.

    Every call is an independent POST; the client keeps no per-call state, so
    ``request`` may be awaited concurrently from several tasks.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        api_address: str | None = None,
        token: str | None = None,
        transport: Transport | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        if config is None:
            config = ClientConfig(api_address=api_address or "", token=token)
        if not config.api_address:
            raise ConfigurationError("api_address is required to create a Lotus RPC client")
        self._config = config
        self._runner: asyncio.Runner | None = None
        self._owns_transport = transport is None
        self._transport: Transport = transport or HttpxTransport(timeout=timeout)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def api_address(self) -> str:
        return self._config.api_address

    async def request(self, method: str, *params: Any) -> Any:
        """Invoke ``Filecoin.<method>`` with positional ``params`` and return its result."""

        return await self._call(method, params)

    def request_sync(self, method: str, *params: Any) -> Any:
        """Blocking variant of :meth:`request` for code without an event loop.

        All blocking calls share one event loop owned by the client, since an
        ``httpx.AsyncClient`` stays bound to the loop it first connected on.
        Release it with :meth:`close` or a ``with`` block.
        """

        if self._runner is None:
            self._runner = asyncio.Runner()
        return self._runner.run(self.request(method, *params))

    async def _call(self, method: str, params: tuple[Any, ...]) -> Any:
        payload = build_request(method, params)
        headers = build_headers(self._config.token)
        logger.debug(
            "Calling %s on %s (params=%d, auth=%s)",
            payload["method"],
            self._config.api_address,
            len(payload["params"]),
            "Authorization" in headers,
        )
        data = await self._transport.post(self._config.api_address, payload, headers)
        try:
            throw_if_errors(data)
        except RpcError as exc:
            logger.debug("%s failed (code=%s): %s", payload["method"], exc.code, exc)
            raise
        return data.get("result")

    async def aclose(self) -> None:
        """Dispose the HTTP transport if this client created it."""

        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            await self._transport.aclose()

    def close(self) -> None:
        """Release the transport and the event loop used by :meth:`request_sync`."""

        runner = self._runner or asyncio.Runner()
        self._runner = None
        try:
            runner.run(self.aclose())
        finally:
            runner.close()

    def __enter__(self) -> LotusRPCClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    async def __aenter__(self) -> LotusRPCClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


RpcClient = LotusRPCClient

__all__ = ["ClientConfig", "LotusRPCClient", "RpcClient"]
