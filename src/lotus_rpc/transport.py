"""HTTP transport for the Lotus RPC client."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class Transport(Protocol):
    """Anything able to POST a JSON body and hand back the parsed JSON reply."""

    async def post(self, url: str, body: Any, headers: Mapping[str, str]) -> Any: ...


class HttpxTransport:
    """`Transport` backed by an ``httpx.AsyncClient``.

    Failures are raised as the ``httpx.HTTPError`` subclasses httpx itself
    produces; non-2xx replies fail through ``raise_for_status``.
    """

    def __init__(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def post(self, url: str, body: Any, headers: Mapping[str, str]) -> Any:
        response = await self._client.post(
            url,
            content=json.dumps(body).encode("utf-8"),
            headers=dict(headers),
        )
        response.raise_for_status()
        try:
            data = response.json()
        except ValueError as exc:
            logger.debug("Non-JSON reply from %s (status=%s)", url, response.status_code)
            raise httpx.DecodingError("Invalid JSON in RPC response", request=response.request) from exc
        if not isinstance(data, Mapping):
            raise httpx.DecodingError("RPC response is not a JSON object", request=response.request)
        return data

    async def aclose(self) -> None:
        """Dispose the underlying HTTP client if owned by this transport."""

        if self._owns_client:
            await self._client.aclose()


__all__ = ["DEFAULT_TIMEOUT_SECONDS", "HttpxTransport", "Transport"]
