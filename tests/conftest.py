# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for versionkit tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a project directory with an empty [tool.versionkit] table."""
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(
        """[project]
name = "sample-project"
version = "1.0.0"

[tool.versionkit]
"""
    )
    return tmp_path


@pytest.fixture
def write_pyproject(tmp_path: Path):
    """Return a helper writing a pyproject.toml with the given [tool.versionkit] body."""

    def _write(body: str) -> Path:
        (tmp_path / "pyproject.toml").write_text(f"[tool.versionkit]\n{body}\n")
        return tmp_path

    return _write
