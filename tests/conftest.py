"""Shared test fixtures."""

from __future__ import annotations

import pytest

from catalog.api.models import Product
from catalog.config import Settings
from catalog.services.metrics import CacheStats
from catalog.services.product_service import ProductService
from catalog.services.product_store import ProductStore


class FakeClock:
    """Monotonic clock the test advances by hand."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        cache_ttl_seconds=300,
        simulated_latency_ms=0,
        seed_count=10,
        burst_size=20,
    )


@pytest.fixture
def store() -> ProductStore:
    store = ProductStore(":memory:")
    store.seed(10)
    yield store
    store.close()


@pytest.fixture
def stats() -> CacheStats:
    return CacheStats()


@pytest.fixture
def product_service(settings, store, stats) -> ProductService:
    return ProductService(settings=settings, store=store, stats=stats, latency=0)


@pytest.fixture
def sample_product() -> Product:
    return Product(id=7, name="Product 7", price=7000, description="Description 7", stock=1000)
