"""CatalogApp — terminal dashboard for cached vs uncached lookups."""

from __future__ import annotations

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding

from catalog.config import Settings, load_settings
from catalog.services.benchmark import run_burst
from catalog.services.product_service import ProductService
from catalog.ui.widgets.product_selector import ProductSelector
from catalog.ui.widgets.report_panel import ReportPanel
from catalog.ui.widgets.status_bar import StatusBar

log = logging.getLogger(__name__)


class CatalogApp(App):
    """Fire bursts of product lookups and watch the cache absorb them."""

    TITLE = "Catalog Cache"

    BINDINGS = [
        Binding("q", "quit", "Quit", priority=True),
        Binding("right", "next_product", "Next Product", show=False),
        Binding("left", "prev_product", "Prev Product", show=False),
        Binding("c", "cached_burst", "Cached", show=False),
        Binding("u", "uncached_burst", "Uncached", show=False),
        Binding("i", "invalidate", "Invalidate", show=False),
        Binding("x", "invalidate_all", "Clear", show=False),
    ]

    def __init__(self, settings: Settings | None = None, service: ProductService | None = None) -> None:
        super().__init__()
        self.settings: Settings = settings or load_settings()
        self.service = service or ProductService(self.settings)

    def compose(self) -> ComposeResult:
        yield ProductSelector(max_id=self.settings.seed_count, id="product-selector")
        yield ReportPanel(id="report-panel")
        yield StatusBar(id="status-bar")

    def on_mount(self) -> None:
        if not self.settings.uses_remote_catalog:
            self.service.seed()
        else:
            self.query_one("#status-bar", StatusBar).set_warning(
                f"Remote catalog: {self.settings.catalog_base_url}"
            )
        self._refresh_status()

    async def on_unmount(self) -> None:
        await self.service.close()

    @property
    def _product_id(self) -> int:
        return self.query_one("#product-selector", ProductSelector).product_id

    def _refresh_status(self) -> None:
        self.query_one("#status-bar", StatusBar).update_stats(
            self.service.stats, self.service.cache
        )

    def action_next_product(self) -> None:
        self.query_one("#product-selector", ProductSelector).next_product()

    def action_prev_product(self) -> None:
        self.query_one("#product-selector", ProductSelector).prev_product()

    def action_cached_burst(self) -> None:
        self.run_worker(self._burst(cached=True), exclusive=True, group="burst")

    def action_uncached_burst(self) -> None:
        self.run_worker(self._burst(cached=False), exclusive=True, group="burst")

    def action_invalidate(self) -> None:
        self.service.force_refresh(self._product_id)
        self._refresh_status()

    def action_invalidate_all(self) -> None:
        self.service.force_refresh()
        self._refresh_status()

    async def _burst(self, *, cached: bool) -> None:
        product_id = self._product_id
        status = self.query_one("#status-bar", StatusBar)
        panel = self.query_one("#report-panel", ReportPanel)
        selector = self.query_one("#product-selector", ProductSelector)

        status.set_running(True)
        try:
            report = await run_burst(
                self.service, product_id, self.settings.burst_size, cached=cached
            )
            panel.add_reports([report])
            if report.errors:
                status.set_warning(f"{report.errors} lookups failed for product {product_id}")
            else:
                status.set_warning("")
                if cached:
                    selector.show_product(
                        await self.service.get_product_with_cache(product_id)
                    )
            status.update_run_time()
        except Exception as e:
            log.exception("Burst failed for product %d", product_id)
            panel.show_error(str(e))
        finally:
            status.set_running(False)
            self._refresh_status()
