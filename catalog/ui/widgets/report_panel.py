"""Panel listing recent burst reports, newest first."""

from __future__ import annotations

from rich.console import Group
from rich.rule import Rule
from rich.text import Text

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Static

from catalog.api.models import BurstReport

MAX_REPORTS = 30


def _build_header() -> Text:
    h = Text()
    h.append("MODE".ljust(9), style="bold #00ff88")
    h.append("  ")
    h.append("PRODUCT".rjust(7), style="bold #00ff88")
    h.append("  ")
    h.append("REQS".rjust(5), style="bold #00ff88")
    h.append("  ")
    h.append("LOADS".rjust(5), style="bold #00ff88")
    h.append("  ")
    h.append("ERR".rjust(4), style="bold #00ff88")
    h.append("  ")
    h.append("TOTAL".rjust(10), style="bold #00ff88")
    h.append("  ")
    h.append("AVG".rjust(9), style="bold #00ff88")
    return h


def _build_row(report: BurstReport) -> Text:
    line = Text()
    mode_style = "bold cyan" if report.mode == "cached" else "bold yellow"
    line.append(report.mode.ljust(9), style=mode_style)
    line.append("  ")
    line.append(str(report.product_id).rjust(7), style="white")
    line.append("  ")
    line.append(str(report.requests).rjust(5), style="dim")
    line.append("  ")

    # One load per burst is the single-flight ideal.
    loads_style = "green" if report.backing_calls <= 1 else "white"
    line.append(str(report.backing_calls).rjust(5), style=loads_style)
    line.append("  ")

    line.append(str(report.errors).rjust(4), style="bold red" if report.errors else "dim")
    line.append("  ")
    line.append(f"{report.elapsed_ms:.1f}ms".rjust(10), style="white")
    line.append("  ")
    line.append(f"{report.avg_ms:.2f}ms".rjust(9), style="dim")
    return line


def merge_reports(
    existing: list[BurstReport], new: list[BurstReport], limit: int = MAX_REPORTS,
) -> list[BurstReport]:
    """Prepend new reports, newest first, keeping at most limit."""
    return (list(reversed(new)) + existing)[:limit]


def build_report_display(reports: list[BurstReport]) -> Group:
    elements: list = [_build_header(), Rule(style="#00ff88")]
    for r in reports:
        elements.append(_build_row(r))
    return Group(*elements)


class ReportPanel(VerticalScroll):
    """Scrollable list of cached vs uncached burst results."""

    DEFAULT_CSS = """
    ReportPanel {
        height: 1fr;
        border-top: thick #00ff88;
        padding: 0 1;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._reports: list[BurstReport] = []

    def compose(self) -> ComposeResult:
        yield Static(
            "[bold #00ff88]  BURSTS[/]  [dim]c: cached · u: uncached[/dim]",
            id="report-header",
        )
        yield Static("[dim]  No bursts yet[/dim]", id="report-content")

    @property
    def reports(self) -> list[BurstReport]:
        return list(self._reports)

    def add_reports(self, reports: list[BurstReport]) -> None:
        self._reports = merge_reports(self._reports, reports)
        try:
            content = self.query_one("#report-content", Static)
        except Exception:
            return
        content.update(build_report_display(self._reports))

    def show_error(self, message: str) -> None:
        try:
            content = self.query_one("#report-content", Static)
        except Exception:
            return
        content.update(f"[bold red]Error: {message}[/bold red]")
