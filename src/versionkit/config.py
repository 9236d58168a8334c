# SPDX-License-Identifier: MIT
"""Configuration loading from pyproject.toml.

Defaults for the versionkit command are read from the [tool.versionkit]
table:

    [tool.versionkit]
    named = true           # parse arguments as named versions
    case_sensitive = false # name lookups respect case
    sort = false           # sort compound output
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


class ConfigError(Exception):
    """Raised when configuration loading fails."""

    pass


_BOOL_OPTIONS = ("named", "case_sensitive", "sort")


@dataclass
class VersionKitConfig:
    """Configuration for the versionkit command.

    Attributes:
        project_dir: Directory containing pyproject.toml, if one was found
        named: Treat version arguments as named versions by default
        case_sensitive: Compare names case-sensitively in lookups
        sort: Sort compound versions before printing them
    """

    project_dir: Optional[Path] = None
    named: bool = False
    case_sensitive: bool = False
    sort: bool = False

    @classmethod
    def from_pyproject(cls, project_dir: str | Path) -> "VersionKitConfig":
        """Load configuration from pyproject.toml.

        Args:
            project_dir: Directory containing pyproject.toml

        Returns:
            VersionKitConfig instance

        Raises:
            ConfigError: If the file is invalid or holds invalid values
            FileNotFoundError: If pyproject.toml doesn't exist
        """
        project_path = Path(project_dir)
        pyproject_path = project_path / "pyproject.toml"

        if not pyproject_path.exists():
            raise FileNotFoundError(f"pyproject.toml not found in {project_path}")

        try:
            with open(pyproject_path, "rb") as f:
                pyproject = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML syntax: {e}") from e

        return cls.from_pyproject_dict(pyproject, project_path)

    @classmethod
    def from_pyproject_dict(
        cls,
        pyproject: dict[str, Any],
        project_dir: Optional[Path] = None,
    ) -> "VersionKitConfig":
        """Create VersionKitConfig from a parsed pyproject.toml dictionary.

        Raises:
            ConfigError: If [tool.versionkit] is not a table or an option has the wrong type
        """
        tool_versionkit = pyproject.get("tool", {}).get("versionkit", {})
        if not isinstance(tool_versionkit, dict):
            raise ConfigError("[tool.versionkit] must be a table")

        options: dict[str, bool] = {}
        for key in _BOOL_OPTIONS:
            if key not in tool_versionkit:
                continue
            value = tool_versionkit[key]
            if not isinstance(value, bool):
                raise ConfigError(
                    f"[tool.versionkit] {key} must be true or false, got {value!r}"
                )
            options[key] = value

        return cls(project_dir=project_dir, **options)


def find_project_root(start_dir: Optional[str | Path] = None) -> Optional[Path]:
    """Find the nearest directory containing pyproject.toml.

    Args:
        start_dir: Directory to start searching from (defaults to cwd)

    Returns:
        Path to the project root directory, or None if there is none
    """
    current = Path(start_dir) if start_dir else Path.cwd()
    current = current.resolve()

    while True:
        if (current / "pyproject.toml").exists():
            return current
        if current == current.parent:
            return None
        current = current.parent


def load_config(project_dir: Optional[str | Path] = None) -> VersionKitConfig:
    """Load configuration for the given directory.

    Falls back to defaults when no pyproject.toml is found.

    Raises:
        ConfigError: If configuration cannot be loaded
    """
    root = find_project_root(project_dir)
    if root is None:
        return VersionKitConfig()
    return VersionKitConfig.from_pyproject(root)
