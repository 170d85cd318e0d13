from __future__ import annotations

import logging
import time
from typing import Any

import httpx


logger = logging.getLogger("pokeapi_endpoints")


class ApiTransportError(Exception):
    pass


class ApiUpstreamError(Exception):
    def __init__(self, *, status_code: int, body: Any) -> None:
        super().__init__(f"API upstream error: {status_code}")
        self.status_code = status_code
        self.body = body


class ApiDecodeError(Exception):
    def __init__(self, message: str, *, body: Any = None) -> None:
        super().__init__(message)
        self.body = body


class ApiClient:
    def __init__(
        self,
        *,
        base_uri: str | None,
        timeout_seconds: float = 10.0,
        connect_timeout_seconds: float = 3.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_uri = base_uri.rstrip("/") if base_uri else base_uri
        self._timeout = httpx.Timeout(timeout_seconds, connect=connect_timeout_seconds)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def base_uri(self) -> str | None:
        return self._base_uri

    def _base_url(self) -> str:
        if not self._base_uri:
            raise ApiTransportError("base_uri not configured")
        return self._base_uri

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client:
            return self._client
        self._client = httpx.AsyncClient(
            base_url=self._base_url(),
            timeout=self._timeout,
            headers={"Accept": "application/json"},
            transport=self._transport,
        )
        return self._client

    async def get_json(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        """
        GET `path` relative to the base URI and return the decoded JSON body.

        Raises ApiTransportError on network failures, ApiUpstreamError on any
        HTTP status >= 400 and ApiDecodeError when the body is not JSON.
        """
        client = await self._get_client()
        start = time.perf_counter()
        try:
            resp = await client.get(path, params=params)
        except httpx.TransportError as exc:
            raise ApiTransportError(str(exc)) from exc

        duration_ms = (time.perf_counter() - start) * 1000
        logger.info("GET %s -> %s (%.1fms)", resp.url, resp.status_code, duration_ms)

        body: Any
        try:
            body = resp.json()
        except ValueError as exc:
            if resp.status_code >= 400:
                raise ApiUpstreamError(status_code=resp.status_code, body=resp.text) from exc
            raise ApiDecodeError(f"Response from {resp.url} is not valid JSON", body=resp.text) from exc

        if resp.status_code >= 400:
            raise ApiUpstreamError(status_code=resp.status_code, body=body)
        return body
