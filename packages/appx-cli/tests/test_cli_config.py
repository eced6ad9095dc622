# SPDX-License-Identifier: MIT
"""Tests for CLI configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from appx_cli.config import (
    DEFAULT_MAKEAPPX,
    DEFAULT_OUTPUT,
    CLIConfig,
    ConfigError,
    find_config_file,
    load_config,
)


class TestCLIConfig:
    """Tests for CLIConfig."""

    def test_from_appx_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "appx.toml"
        path.write_text(
            'identity_name = "Contoso.App"\n'
            'publisher = "CN=Contoso"\n'
            'publisher_display_name = "Contoso"\n'
            'makeappx = "C:/SDK/makeappx.exe"\n'
        )

        config = CLIConfig.from_file(path)

        assert config.identity_name == "Contoso.App"
        assert config.publisher == "CN=Contoso"
        assert config.makeappx == "C:/SDK/makeappx.exe"
        assert config.output == DEFAULT_OUTPUT
        assert config.default_rules is True
        assert config.project_dir == tmp_path
        assert config.config_path == path

    def test_from_pyproject(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "site"\n\n[tool.appx]\nidentity_name = "Py.App"\n')

        config = CLIConfig.from_file(path)

        assert config.identity_name == "Py.App"
        assert config.makeappx == DEFAULT_MAKEAPPX

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            CLIConfig.from_file(tmp_path / "appx.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "appx.toml"
        path.write_text("identity_name = \n")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            CLIConfig.from_file(path)

    def test_wrong_string_type(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="'publisher' must be a string"):
            CLIConfig.from_dict({"publisher": 1}, tmp_path)

    def test_wrong_bool_type(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="'default_rules' must be a boolean"):
            CLIConfig.from_dict({"default_rules": "no"}, tmp_path)


class TestFindConfigFile:
    """Tests for find_config_file and load_config."""

    def test_finds_in_parent(self, tmp_path: Path) -> None:
        (tmp_path / "appx.toml").write_text('identity_name = "A"\n')
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == (tmp_path / "appx.toml").resolve()

    def test_appx_toml_preferred(self, tmp_path: Path) -> None:
        (tmp_path / "appx.toml").write_text("")
        (tmp_path / "pyproject.toml").write_text("[tool.appx]\n")

        assert find_config_file(tmp_path).name == "appx.toml"

    def test_pyproject_without_table_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "pyproject.toml").write_text('[tool.appx]\npublisher = "CN=X"\n')

        assert find_config_file(tmp_path / "sub").parent.name == "sub"

    def test_load_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("appx_cli.config.find_config_file", lambda start_dir=None: None)

        config = load_config(tmp_path)

        assert config.project_dir == tmp_path
        assert config.identity_name == ""
        assert config.config_path is None

    def test_load_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom" / "appx.toml"
        path.parent.mkdir()
        path.write_text('publisher = "CN=Custom"\n')

        assert load_config(tmp_path, path).publisher == "CN=Custom"
