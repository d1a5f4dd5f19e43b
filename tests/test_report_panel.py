"""Tests for the burst report rendering helpers."""

from catalog.api.models import BurstReport
from catalog.ui.widgets.report_panel import (
    MAX_REPORTS,
    ReportPanel,
    build_report_display,
    merge_reports,
)


def _report(mode: str, loads: int) -> BurstReport:
    return BurstReport(mode=mode, product_id=3, requests=50, backing_calls=loads, elapsed_ms=120.0)


def test_display_has_header_rule_and_rows():
    group = build_report_display([_report("cached", 1), _report("uncached", 50)])
    assert len(group.renderables) == 4


def test_row_text_contents():
    group = build_report_display([_report("uncached", 50)])
    row = group.renderables[2]
    assert row.plain.startswith("uncached")
    assert "120.0ms" in row.plain
    assert "2.40ms" in row.plain


def _numbered(n: int) -> BurstReport:
    return BurstReport(mode="cached", product_id=n, requests=1, backing_calls=0, elapsed_ms=1.0)


def test_merge_puts_newest_first():
    existing = [_numbered(2), _numbered(1)]
    merged = merge_reports(existing, [_numbered(3), _numbered(4)])
    assert [r.product_id for r in merged] == [4, 3, 2, 1]


def test_merge_caps_history():
    existing = [_numbered(n) for n in range(MAX_REPORTS, 0, -1)]
    merged = merge_reports(existing, [_numbered(MAX_REPORTS + 1)])
    assert len(merged) == MAX_REPORTS
    assert merged[0].product_id == MAX_REPORTS + 1
    assert merged[-1].product_id == 2


def test_panel_keeps_reports_before_mount():
    panel = ReportPanel()
    panel.add_reports([_numbered(1)])
    panel.add_reports([_numbered(2)])
    assert [r.product_id for r in panel.reports] == [2, 1]
