"""Tests for the remote catalog client and endpoints."""

from __future__ import annotations

import httpx
import pytest

from catalog.api.client import CatalogAPIClient
from catalog.api.endpoints import get_product, list_products
from catalog.services.errors import ProductNotFoundError

PRODUCTS = {
    1: {"id": 1, "name": "Product 1", "price": 1000, "description": "Description 1", "stock": 1000},
    2: {"id": 2, "name": "Product 2", "price": 2000, "description": "Description 2", "stock": 1000},
}


def _handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/api/products":
        return httpx.Response(200, json=list(PRODUCTS.values()))
    if path == "/api/products/500":
        return httpx.Response(500, json={"error": "boom"})
    product_id = int(path.rsplit("/", 1)[1])
    if product_id in PRODUCTS:
        return httpx.Response(200, json=PRODUCTS[product_id])
    return httpx.Response(404, json={"error": "not found"})


@pytest.fixture
async def client():
    c = CatalogAPIClient("http://catalog.test", transport=httpx.MockTransport(_handler))
    yield c
    await c.close()


async def test_get_returns_json(client):
    data = await client.get("/api/products/1")
    assert data["name"] == "Product 1"
    assert client.requests_made == 1


async def test_get_product(client):
    p = await get_product(client, 2)
    assert p.id == 2
    assert p.price == 2000


async def test_get_product_404_maps_to_not_found(client):
    with pytest.raises(ProductNotFoundError) as info:
        await get_product(client, 77)
    assert info.value.product_id == 77


async def test_get_product_server_error_propagates(client):
    with pytest.raises(httpx.HTTPStatusError):
        await get_product(client, 500)


async def test_list_products(client):
    products = await list_products(client)
    assert [p.id for p in products] == [1, 2]
