"""Load .env and settings.yaml, expose all configuration."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

log = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _load_env() -> None:
    env_path = PROJECT_ROOT / ".env"
    load_dotenv(env_path)


def _load_yaml() -> dict:
    settings_path = PROJECT_ROOT / "settings.yaml"
    if settings_path.exists():
        try:
            with open(settings_path) as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError:
            log.warning("Failed to parse settings.yaml, using defaults")
            return {}
    return {}


class Settings(BaseModel):
    catalog_base_url: str = ""

    @field_validator("catalog_base_url")
    @classmethod
    def strip_base_url(cls, v: str) -> str:
        return v.strip().rstrip("/")

    cache_ttl_seconds: float = 300.0

    @field_validator("cache_ttl_seconds")
    @classmethod
    def ttl_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("cache_ttl_seconds must be positive")
        return v

    # Artificial per-lookup cost standing in for query and processing time.
    simulated_latency_ms: int = 50
    seed_count: int = 100
    db_path: str = ":memory:"
    burst_size: int = 50
    log_level: str = "INFO"
    log_file: str = "catalog.log"

    @property
    def simulated_latency(self) -> float:
        """Latency in seconds."""
        return max(self.simulated_latency_ms, 0) / 1000

    @property
    def uses_remote_catalog(self) -> bool:
        return bool(self.catalog_base_url)


def load_settings() -> Settings:
    _load_env()
    raw = _load_yaml()
    base_url = os.getenv("CATALOG_BASE_URL")
    if base_url is not None:
        raw["catalog_base_url"] = base_url
    return Settings(**raw)
