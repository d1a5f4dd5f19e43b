"""Tests for Settings and load_settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from catalog import config
from catalog.config import Settings, load_settings


def test_defaults():
    s = Settings()
    assert s.cache_ttl_seconds == 300
    assert s.simulated_latency_ms == 50
    assert s.seed_count == 100
    assert s.simulated_latency == 0.05
    assert not s.uses_remote_catalog


@pytest.mark.parametrize("ttl", [0, -5])
def test_non_positive_ttl_rejected(ttl):
    with pytest.raises(ValidationError):
        Settings(cache_ttl_seconds=ttl)


def test_base_url_stripped():
    s = Settings(catalog_base_url="  http://catalog.test/ ")
    assert s.catalog_base_url == "http://catalog.test"
    assert s.uses_remote_catalog


def test_negative_latency_clamped():
    assert Settings(simulated_latency_ms=-10).simulated_latency == 0


def test_load_settings_reads_yaml(tmp_path, monkeypatch):
    (tmp_path / "settings.yaml").write_text("cache_ttl_seconds: 30\nburst_size: 5\n")
    monkeypatch.setattr(config, "PROJECT_ROOT", tmp_path)
    monkeypatch.delenv("CATALOG_BASE_URL", raising=False)

    s = load_settings()
    assert s.cache_ttl_seconds == 30
    assert s.burst_size == 5


def test_load_settings_env_overrides_base_url(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "PROJECT_ROOT", tmp_path)
    monkeypatch.setenv("CATALOG_BASE_URL", "http://other.test")

    assert load_settings().catalog_base_url == "http://other.test"


def test_load_settings_bad_yaml_uses_defaults(tmp_path, monkeypatch):
    (tmp_path / "settings.yaml").write_text("cache_ttl_seconds: [unclosed\n")
    monkeypatch.setattr(config, "PROJECT_ROOT", tmp_path)
    monkeypatch.delenv("CATALOG_BASE_URL", raising=False)

    assert load_settings().cache_ttl_seconds == 300
