"""Status bar: cache stats, last burst time, warnings."""

from __future__ import annotations

from datetime import datetime

from textual.widgets import Static

from catalog.services.cache import ReadThroughCache
from catalog.services.metrics import CacheStats

KEY_HELP = (
    "[dim]q:Quit  ←/→:Product  c:Cached  u:Uncached  "
    "i:Invalidate  x:Clear[/dim]"
)


class StatusBar(Static):
    """Bottom status bar showing hit ratio, entry counts, and warnings."""

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        dock: bottom;
        background: #1a1a2e;
        color: #aaaaaa;
        padding: 0 1;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(f"[bold]Hit ratio: --[/bold]  |  {KEY_HELP}", **kwargs)
        self._ratio = "Hit ratio: --"
        self._counts = ""
        self._entries = ""
        self._last_run = ""
        self._warning = ""
        self._running = False

    def update_stats(self, stats: CacheStats, cache: ReadThroughCache) -> None:
        self._ratio = stats.status_text
        self._counts = stats.summary_text
        self._entries = f"entries {len(cache)} ({cache.in_flight} loading)"
        self._refresh_content()

    def update_run_time(self) -> None:
        self._last_run = f"Last: {datetime.now().strftime('%H:%M:%S')}"
        self._refresh_content()

    def set_warning(self, text: str) -> None:
        self._warning = text
        self._refresh_content()

    def set_running(self, running: bool) -> None:
        self._running = running
        self._refresh_content()

    def _refresh_content(self) -> None:
        parts: list[str] = [f"[bold]{self._ratio}[/bold]"]
        if self._counts:
            parts.append(self._counts)
        if self._entries:
            parts.append(self._entries)
        if self._running:
            parts.append("[bold yellow]Running...[/bold yellow]")
        if self._last_run:
            parts.append(self._last_run)
        if self._warning:
            parts.append(f"[bold red]{self._warning}[/bold red]")
        parts.append(KEY_HELP)
        self.update("  |  ".join(parts))
