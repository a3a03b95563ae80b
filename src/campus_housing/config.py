"""Configuration loader."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


@dataclass
class SearchSettings:
    """Search engine behaviour."""

    proximity: str
    radius_miles: float
    enforce_date_overlap: bool
    suggestion_limit: int
    map_radius_miles: float


@dataclass
class ProviderSettings:
    """Live campus-search provider."""

    enabled: bool
    prefer_live: bool
    base_url: str
    timeout_seconds: float
    retries: int
    backoff_seconds: float


@dataclass
class StorageSettings:
    db_path: Path
    retries: int
    backoff_seconds: float


@dataclass
class LoggingSettings:
    level: str
    file: Path | None


def default_config_path() -> Path:
    return Path(__file__).parent.parent.parent / "config.yaml"


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load config from YAML file."""
    path = Path(config_path) if config_path else default_config_path()
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    with open(path) as f:
        return yaml.safe_load(f) or {}


def get_search_settings(config: dict[str, Any]) -> SearchSettings:
    """Extract search settings from config."""
    s = config.get("search", {}) or {}
    return SearchSettings(
        proximity=str(s.get("proximity", "same_region")),
        radius_miles=float(s.get("radius_miles", 5.0)),
        enforce_date_overlap=bool(s.get("enforce_date_overlap", False)),
        suggestion_limit=int(s.get("suggestion_limit", 8)),
        map_radius_miles=float(s.get("map_radius_miles", 5.0)),
    )


def get_provider_settings(config: dict[str, Any]) -> ProviderSettings:
    """Extract live campus provider settings from config."""
    p = config.get("campus_provider", {}) or {}
    return ProviderSettings(
        enabled=bool(p.get("enabled", False)),
        prefer_live=bool(p.get("prefer_live", False)),
        base_url=str(p.get("base_url", "https://api.data.gov/ed/collegescorecard/v1")),
        timeout_seconds=float(p.get("timeout_seconds", 5.0)),
        retries=int(p.get("retries", 2)),
        backoff_seconds=float(p.get("backoff_seconds", 0.5)),
    )


def get_storage_settings(config: dict[str, Any]) -> StorageSettings:
    st = config.get("storage", {}) or {}
    return StorageSettings(
        db_path=Path(st.get("db_path", "output/campus_housing.duckdb")),
        retries=int(st.get("retries", 2)),
        backoff_seconds=float(st.get("backoff_seconds", 0.5)),
    )


def get_logging_settings(config: dict[str, Any]) -> LoggingSettings:
    lg = config.get("logging", {}) or {}
    log_file = lg.get("file")
    return LoggingSettings(
        level=str(lg.get("level", "INFO")),
        file=Path(log_file) if log_file else None,
    )
