"""Document store client for a remote ``/documents`` endpoint."""

from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx


class HttpDocumentStore:
    """Talks to another roster_architect API (or anything serving the same routes).

    ``PUT /documents/{key}?namespace=...`` stores a JSON body, or
    answers 409 when the key is taken. ``GET /documents/{key}?namespace=...``
    returns it, or 404 when absent.
    """

    def __init__(self, base_url: str, *, client: httpx.AsyncClient | None = None):
        self.base_url = base_url.rstrip("/")
        self._client = client

    def _url(self, key: str) -> str:
        return f"{self.base_url}/documents/{quote(key, safe='')}"

    async def _send(self, method: str, namespace: str, key: str, body: Any = None) -> httpx.Response:
        params = {"namespace": namespace}
        if self._client is not None:
            return await self._client.request(method, self._url(key), params=params, json=body)
        async with httpx.AsyncClient() as client:
            return await client.request(method, self._url(key), params=params, json=body)

    async def put(self, namespace: str, key: str, document: Dict[str, Any]) -> None:
        resp = await self._send("PUT", namespace, key, document)
        resp.raise_for_status()

    async def get(self, namespace: str, key: str) -> Optional[Dict[str, Any]]:
        resp = await self._send("GET", namespace, key)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json()
