"""Fixtures for CLI testing."""

import pytest
from typer.testing import CliRunner

from kg_dashboard_common import get_settings
from kg_dashboard_contracts import ProgressState, Source, SourceCategory, SourceSnapshot


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def quiet_settings(monkeypatch):
    """Keep log output off stdout so command output stays parseable."""
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    monkeypatch.setenv("TELEMETRY_CONSOLE", "false")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fast_args() -> list[str]:
    """Options that make a search settle in milliseconds."""
    return ["--stagger", "0.005", "--tick-min", "0.001", "--tick-max", "0.002"]


@pytest.fixture
def sample_snapshots() -> list[SourceSnapshot]:
    """One source in each status."""
    return [
        SourceSnapshot(
            source=Source(id="crunchbase", name="Crunchbase", category=SourceCategory.DATABASE),
            state=ProgressState.complete("Found 27 matches"),
        ),
        SourceSnapshot(
            source=Source(id="techcrunch", name="TechCrunch", category=SourceCategory.WEB),
            state=ProgressState.failed("Connection timeout"),
        ),
        SourceSnapshot(
            source=Source(id="apollo", name="Apollo", category=SourceCategory.DATABASE),
            state=ProgressState.searching(45.0),
        ),
        SourceSnapshot(
            source=Source(id="sec-edgar", name="SEC EDGAR", category=SourceCategory.API),
            state=ProgressState.idle(),
        ),
    ]
