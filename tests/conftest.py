"""Shared pytest fixtures for xplot tests."""

from pathlib import Path

import pytest
from typer.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Return the path of an xplot.toml inside a temporary project."""
    return tmp_path / "xplot.toml"
