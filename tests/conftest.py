"""Shared fixtures for the qrgen test-suite."""
from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner


@pytest.fixture()
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def config_home(tmp_path, monkeypatch) -> Path:
    """Point the qrgen config directory at a temporary location."""

    home = tmp_path / "config"
    monkeypatch.setenv("QRGEN_CONFIG_DIR", str(home))
    return home
