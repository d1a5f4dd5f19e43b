"""Side-by-side bursts of cached and uncached product lookups."""

from __future__ import annotations

import asyncio
import logging
import time

from catalog.api.models import BurstReport
from catalog.services.product_service import ProductService

log = logging.getLogger(__name__)


async def run_burst(
    service: ProductService,
    product_id: int,
    requests: int,
    *,
    cached: bool = True,
) -> BurstReport:
    """Fire ``requests`` concurrent lookups for one product and time them."""
    lookup = service.get_product_with_cache if cached else service.get_product
    before = service.backing_calls
    start = time.perf_counter()
    results = await asyncio.gather(
        *[lookup(product_id) for _ in range(requests)],
        return_exceptions=True,
    )
    elapsed_ms = (time.perf_counter() - start) * 1000
    errors = sum(1 for r in results if isinstance(r, Exception))
    report = BurstReport(
        mode="cached" if cached else "uncached",
        product_id=product_id,
        requests=requests,
        backing_calls=service.backing_calls - before,
        errors=errors,
        elapsed_ms=elapsed_ms,
    )
    log.info(
        "%s burst for product %d: %d requests, %d backing calls, %.1f ms",
        report.mode, product_id, requests, report.backing_calls, elapsed_ms,
    )
    return report


async def compare(
    service: ProductService, product_id: int, requests: int,
) -> list[BurstReport]:
    """Uncached burst first, then cached, so the cached run starts cold."""
    service.force_refresh(product_id)
    uncached = await run_burst(service, product_id, requests, cached=False)
    cached = await run_burst(service, product_id, requests, cached=True)
    return [uncached, cached]
