"""Async httpx wrapper for a remote product catalog service."""

from __future__ import annotations

from typing import Any

import httpx


class CatalogAPIClient:
    """Async HTTP client for another catalog instance."""

    def __init__(
        self,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 5.0,
    ) -> None:
        kwargs: dict[str, Any] = {"base_url": base_url, "timeout": timeout}
        if transport is not None:
            kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**kwargs)
        self.requests_made = 0

    async def close(self) -> None:
        await self._client.aclose()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make a GET request and return JSON."""
        response = await self._client.get(path, params=params)
        self.requests_made += 1
        response.raise_for_status()
        return response.json()
