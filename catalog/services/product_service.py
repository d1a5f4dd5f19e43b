"""Product lookups with and without the read-through cache."""

from __future__ import annotations

import asyncio
import logging

from catalog.api.client import CatalogAPIClient
from catalog.api.endpoints import get_product, list_products
from catalog.api.models import ProductResponse
from catalog.config import Settings
from catalog.services.cache import ReadThroughCache
from catalog.services.errors import InvalidConfigurationError, ReadOnlyCatalogError
from catalog.services.metrics import CacheStats
from catalog.services.product_store import ProductStore

log = logging.getLogger(__name__)

KEY_PREFIX = "product::"


def cache_key(product_id: int) -> str:
    return f"{KEY_PREFIX}{product_id}"


class ProductService:
    """Serves product reads from the store or a remote catalog.

    ``get_product`` always hits the backing source. ``get_product_with_cache``
    goes through a ReadThroughCache keyed ``product::{id}``. Writes invalidate
    the affected key. With a remote catalog, reads go to the remote service
    and writes raise ReadOnlyCatalogError.

    An injected ``cache`` reports to its own metrics collector; ``stats``
    defaults to that collector and must be a CacheStats.
    """

    def __init__(
        self,
        settings: Settings,
        store: ProductStore | None = None,
        client: CatalogAPIClient | None = None,
        cache: ReadThroughCache | None = None,
        stats: CacheStats | None = None,
        latency: float | None = None,
    ) -> None:
        self.settings = settings
        self.store = store or ProductStore(settings.db_path)
        if client is None and settings.uses_remote_catalog:
            client = CatalogAPIClient(settings.catalog_base_url)
        self.client = client
        if stats is None and cache is not None:
            if not isinstance(cache.metrics, CacheStats):
                raise InvalidConfigurationError(
                    "an injected cache needs a CacheStats metrics collector"
                )
            stats = cache.metrics
        self.stats = stats or CacheStats()
        if cache is None:
            # An empty cache is falsy, so no `or` here.
            cache = ReadThroughCache(
                ttl=settings.cache_ttl_seconds,
                loader=self._load_product,
                metrics=self.stats,
            )
        self.cache = cache
        self.latency = settings.simulated_latency if latency is None else latency
        self.backing_calls = 0

    async def close(self) -> None:
        if self.client is not None:
            await self.client.close()
        self.store.close()

    def seed(self) -> int:
        return self.store.seed(self.settings.seed_count)

    async def _fetch(self, product_id: int) -> ProductResponse:
        """One backing read, including the simulated processing cost."""
        self.backing_calls += 1
        if self.latency > 0:
            await asyncio.sleep(self.latency)
        if self.client is not None:
            return await get_product(self.client, product_id)
        return ProductResponse.from_product(self.store.find_by_id(product_id))

    async def _load_product(self, key: str) -> ProductResponse:
        product_id = int(key[len(KEY_PREFIX):])
        log.info("[CACHE MISS] loading product %d", product_id)
        product = await self._fetch(product_id)
        log.info("[CACHE MISS] product %d loaded and cached", product_id)
        return product

    async def get_product(self, product_id: int) -> ProductResponse:
        """Uncached read, straight to the backing source."""
        log.debug("[NO CACHE] loading product %d", product_id)
        return await self._fetch(product_id)

    async def get_product_with_cache(self, product_id: int) -> ProductResponse:
        return await self.cache.get(cache_key(product_id), self._load_product)

    def _check_writable(self) -> None:
        if self.client is not None:
            raise ReadOnlyCatalogError(self.settings.catalog_base_url)

    async def list_products(self) -> list[ProductResponse]:
        if self.client is not None:
            return await list_products(self.client)
        return [ProductResponse.from_product(p) for p in self.store.find_all()]

    async def create_product(
        self, name: str, price: int, description: str = "", stock: int = 0,
    ) -> ProductResponse:
        self._check_writable()
        product = self.store.create(name, price, description, stock)
        log.info("Created product %d", product.id)
        # A lookup of this id may have failed and be in flight before creation.
        self.cache.invalidate(cache_key(product.id))
        return ProductResponse.from_product(product)

    async def decrease_stock(self, product_id: int, quantity: int) -> ProductResponse:
        self._check_writable()
        product = self.store.decrease_stock(product_id, quantity)
        self.cache.invalidate(cache_key(product_id))
        return ProductResponse.from_product(product)

    def force_refresh(self, product_id: int | None = None) -> None:
        """Invalidate one product, or every cached product."""
        if product_id is None:
            self.cache.invalidate_all()
        else:
            self.cache.invalidate(cache_key(product_id))
