# SPDX-License-Identifier: MIT
"""CLI configuration loading from appx.toml or pyproject.toml."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

CONFIG_FILENAME = "appx.toml"
PYPROJECT_FILENAME = "pyproject.toml"

DEFAULT_MAKEAPPX = "makeappx"
DEFAULT_OUTPUT = "AppxManifest.xml"


class ConfigError(Exception):
    """Raised when configuration loading fails."""

    pass


@dataclass
class CLIConfig:
    """CLI configuration.

    Attributes:
        project_dir: Directory the configuration was loaded for
        identity_name: Package identity name
        publisher: Publisher subject, e.g. "CN=Contoso"
        publisher_display_name: Human-readable publisher name
        default_rules: Whether to emit the built-in sign-in provider rules
        makeappx: MakeAppx executable used by the package command
        output: Descriptor file name, relative to the asset root
        config_path: File the values were read from, if any
    """

    project_dir: Path
    identity_name: str = ""
    publisher: str = ""
    publisher_display_name: str = ""
    default_rules: bool = True
    makeappx: str = DEFAULT_MAKEAPPX
    output: str = DEFAULT_OUTPUT
    config_path: Optional[Path] = None

    @classmethod
    def from_file(cls, config_path: str | Path) -> "CLIConfig":
        """Load configuration from an appx.toml or pyproject.toml file.

        For pyproject.toml the [tool.appx] table is used.

        Raises:
            ConfigError: If the file is invalid
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML syntax in {path}: {e}") from e

        if path.name == PYPROJECT_FILENAME:
            data = data.get("tool", {}).get("appx", {})

        return cls.from_dict(data, path.parent, config_path=path)

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        project_dir: Path,
        config_path: Optional[Path] = None,
    ) -> "CLIConfig":
        """Create CLIConfig from a parsed configuration table.

        Raises:
            ConfigError: If a value has the wrong type
        """
        def _string(key: str, default: str = "") -> str:
            value = data.get(key, default)
            if not isinstance(value, str):
                raise ConfigError(f"'{key}' must be a string, got {type(value).__name__}")
            return value

        default_rules = data.get("default_rules", True)
        if not isinstance(default_rules, bool):
            raise ConfigError(
                f"'default_rules' must be a boolean, got {type(default_rules).__name__}"
            )

        return cls(
            project_dir=project_dir,
            identity_name=_string("identity_name"),
            publisher=_string("publisher"),
            publisher_display_name=_string("publisher_display_name"),
            default_rules=default_rules,
            makeappx=_string("makeappx", DEFAULT_MAKEAPPX),
            output=_string("output", DEFAULT_OUTPUT),
            config_path=config_path,
        )


def _has_appx_table(pyproject_path: Path) -> bool:
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML syntax in {pyproject_path}: {e}") from e
    return "appx" in data.get("tool", {})


def find_config_file(start_dir: Optional[str | Path] = None) -> Optional[Path]:
    """Find appx.toml, or a pyproject.toml with a [tool.appx] table.

    The search walks from start_dir up to the filesystem root.

    Returns:
        Path to the configuration file, or None if there is none
    """
    current = Path(start_dir) if start_dir else Path.cwd()
    current = current.resolve()

    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = current / PYPROJECT_FILENAME
        if pyproject.is_file() and _has_appx_table(pyproject):
            return pyproject
        if current == current.parent:
            return None
        current = current.parent


def load_config(
    project_dir: Optional[str | Path] = None,
    config_path: Optional[str | Path] = None,
) -> CLIConfig:
    """Load CLI configuration.

    Args:
        project_dir: Directory to start searching from (defaults to cwd)
        config_path: Explicit configuration file, skipping the search

    Returns:
        CLIConfig instance; defaults only when no file is found

    Raises:
        ConfigError: If configuration cannot be loaded
        FileNotFoundError: If an explicit configuration file doesn't exist
    """
    if config_path is not None:
        return CLIConfig.from_file(config_path)

    found = find_config_file(project_dir)
    if found is not None:
        return CLIConfig.from_file(found)

    return CLIConfig(project_dir=Path(project_dir) if project_dir else Path.cwd())
