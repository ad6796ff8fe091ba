import io

import pytest
from rich.console import Console

from pg_seqcheck.ui.console import ConsoleUI


@pytest.fixture
def ui_streams():
    """ConsoleUI writing to in-memory streams; returns (ui, status stream)."""
    status = io.StringIO()
    report = io.StringIO()
    console = Console(file=status, force_terminal=False, width=200)
    ui = ConsoleUI(console=console, report_stream=report)
    return ui, status


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """No PG* variables and no stray config.toml in the working directory."""
    for var in ("PGHOST", "PGPORT", "PGUSER", "PGPASSWORD", "PGDATABASE", "PGSSLMODE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr("pg_seqcheck.config.CONFIG_SEARCH_PATHS", [tmp_path / "none.toml"])
