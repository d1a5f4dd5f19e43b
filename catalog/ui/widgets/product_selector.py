"""Header showing the selected product and its last cached view."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Static

from catalog.api.models import ProductResponse


class ProductSelector(Widget):
    """Steps through product ids 1..max_id."""

    DEFAULT_CSS = """
    ProductSelector {
        height: 3;
        dock: top;
    }
    """

    product_id: reactive[int] = reactive(1)

    def __init__(self, max_id: int, **kwargs) -> None:
        super().__init__(**kwargs)
        self.max_id = max(max_id, 1)
        self._product: ProductResponse | None = None

    def compose(self) -> ComposeResult:
        yield Static(id="product-selector-content")

    def on_mount(self) -> None:
        self._render_selector()

    def watch_product_id(self, _old: int, _new: int) -> None:
        self._product = None
        self._render_selector()

    def next_product(self) -> None:
        self.product_id = self.product_id % self.max_id + 1

    def prev_product(self) -> None:
        self.product_id = (self.product_id - 2) % self.max_id + 1

    def show_product(self, product: ProductResponse) -> None:
        self._product = product
        self._render_selector()

    def _render_selector(self) -> None:
        text = f"[bold white on #333333] Product {self.product_id} [/]  [dim]of {self.max_id}[/dim]"
        if self._product is not None:
            p = self._product
            text += f"  {p.name}  [cyan]{p.price}[/cyan]  [dim]stock {p.stock}[/dim]"
        try:
            content = self.query_one("#product-selector-content", Static)
        except Exception:
            return
        content.update(text)
