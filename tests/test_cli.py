"""Tests for the CLI commands."""

from pathlib import Path

import pytest
import yaml
from loguru import logger
from typer.testing import CliRunner

from campus_housing.cli import app
from campus_housing.search import SearchEngine
from campus_housing.storage import Storage

SAMPLE_FILE = Path(__file__).resolve().parent.parent / "data" / "sample_listings.yaml"

runner = CliRunner()


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    # CLI sinks point at CliRunner streams that are closed after each invoke
    logger.remove()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({
        "search": {"proximity": "same_region"},
        "storage": {"db_path": str(tmp_path / "cli.duckdb"), "backoff_seconds": 0},
        "logging": {"level": "WARNING"},
    }))
    return path


def test_url_command() -> None:
    result = runner.invoke(app, ["url", "--campus", "harvard", "--min", "1000", "-a", "wifi", "-a", "gym"])
    assert result.exit_code == 0
    assert "/search?campus=harvard&min=1000&amenities=gym%2Cwifi" in result.output


def test_url_drops_malformed_values() -> None:
    result = runner.invoke(app, ["url", "--max", "lots", "--room", "castle"])
    assert result.exit_code == 0
    assert result.output.strip() == "/search"


def test_seed_then_search(config_file: Path) -> None:
    seeded = runner.invoke(app, ["seed", "--file", str(SAMPLE_FILE), "--config", str(config_file)])
    assert seeded.exit_code == 0, seeded.output
    assert "Loaded 6 listings" in seeded.output

    result = runner.invoke(app, ["search", "--campus", "harvard", "--min", "2000", "--config", str(config_file)])
    assert result.exit_code == 0, result.output
    assert "1 listings near Harvard University" in result.output


def test_search_rejects_inverted_price_range(config_file: Path) -> None:
    result = runner.invoke(app, ["search", "-q", "min=3000&max=1000", "--config", str(config_file)])
    assert result.exit_code == 1
    assert "max" in result.output


def test_missing_config(tmp_path: Path) -> None:
    result = runner.invoke(app, ["campuses", "harvard", "--config", str(tmp_path / "nope.yaml")])
    assert result.exit_code == 1


def test_campuses_command(config_file: Path) -> None:
    result = runner.invoke(app, ["campuses", "boston", "--config", str(config_file)])
    assert result.exit_code == 0
    assert "Campuses (directory)" in result.output


def test_search_closes_store_on_error(config_file: Path, monkeypatch) -> None:
    closed = []
    real_close = Storage.close

    def close(self) -> None:
        closed.append(self.db_path)
        real_close(self)

    def boom(self, filters, exclude_user_id=None):
        raise RuntimeError("ranking failed")

    monkeypatch.setattr(Storage, "close", close)
    monkeypatch.setattr(SearchEngine, "search", boom)
    result = runner.invoke(app, ["search", "--campus", "harvard", "--config", str(config_file)])
    assert isinstance(result.exception, RuntimeError)
    assert len(closed) == 1
