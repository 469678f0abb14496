from __future__ import annotations

from typing import Any, Dict, Optional, Type
from types import TracebackType

import httpx


class AsyncHttpClient:
    """JSON-over-HTTP client shared by the escrow and state service clients.

    Paths are resolved against `base_url` and every non-2xx response raises
    `httpx.HTTPStatusError`; callers translate httpx errors into channel errors.
    A `transport` may be injected (e.g. `httpx.MockTransport` in tests).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def request_json(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send a request and return the decoded JSON body."""
        resp = await self._client.request(method, "/" + path.lstrip("/"), json=json)
        resp.raise_for_status()
        return resp.json()

    async def get_json(self, path: str) -> Any:
        return await self.request_json("GET", path)

    async def post_json(self, path: str, payload: Dict[str, Any]) -> Any:
        return await self.request_json("POST", path, json=payload)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        await self.aclose()
