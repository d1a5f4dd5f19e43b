"""Typed fetch functions for the remote catalog API."""

from __future__ import annotations

import logging

import httpx

from catalog.api.client import CatalogAPIClient
from catalog.api.models import ProductResponse
from catalog.services.errors import ProductNotFoundError

log = logging.getLogger(__name__)


async def get_product(client: CatalogAPIClient, product_id: int) -> ProductResponse:
    """Fetch one product. A 404 becomes ProductNotFoundError."""
    try:
        data = await client.get(f"/api/products/{product_id}")
    except httpx.HTTPStatusError as exc:
        if exc.response.status_code == 404:
            raise ProductNotFoundError(product_id) from exc
        raise
    return ProductResponse(**data)


async def list_products(client: CatalogAPIClient) -> list[ProductResponse]:
    data = await client.get("/api/products")
    log.debug("Remote catalog returned %d products", len(data))
    return [ProductResponse(**p) for p in data]
