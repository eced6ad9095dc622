# SPDX-License-Identifier: MIT
"""Tests for the appx convert command."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from pathlib import Path

from click.testing import CliRunner

from appx_cli.main import cli

IDENTITY_ARGS = [
    "--identity-name",
    "Contoso.DemoApp",
    "--publisher",
    "CN=Contoso",
    "--publisher-display-name",
    "Contoso Ltd",
]

FOUNDATION = "{http://schemas.microsoft.com/appx/manifest/foundation/windows10}"
UAP = "{http://schemas.microsoft.com/appx/manifest/uap/windows10}"


def rule_matches(path: Path) -> list[str]:
    root = ET.parse(path).getroot()
    return [rule.get("Match") for rule in root.iter(f"{UAP}Rule")]


class TestConvertCommand:
    """Tests for appx convert command."""

    def test_convert_writes_descriptor(self, cli_runner: CliRunner, site: Path) -> None:
        """Test converting a W3C manifest into AppxManifest.xml."""
        result = cli_runner.invoke(cli, ["-C", str(site), "convert", *IDENTITY_ARGS])

        assert result.exit_code == 0, result.output
        assert "Wrote" in result.output
        assert "Application id: Demo" in result.output

        output = site / "AppxManifest.xml"
        assert output.exists()
        root = ET.parse(output).getroot()
        assert root.find(f"{FOUNDATION}Identity").get("Name") == "Contoso.DemoApp"
        assert rule_matches(output)[-2:] == ["https://api.example.com/", "https://example.com/"]

    def test_convert_manifest_argument(self, cli_runner: CliRunner, site: Path, tmp_path: Path) -> None:
        """Test that icons resolve next to a manifest given by path."""
        output = tmp_path / "out" / "descriptor.xml"
        result = cli_runner.invoke(
            cli,
            [
                "-C",
                str(tmp_path),
                "convert",
                "site/manifest.json",
                *IDENTITY_ARGS,
                "-o",
                str(output),
            ],
        )

        assert result.exit_code == 0, result.output
        assert output.exists()
        assert not (site / "AppxManifest.xml").exists()

    def test_convert_no_default_rules(self, cli_runner: CliRunner, site: Path) -> None:
        """Test that --no-default-rules drops the sign-in provider rules."""
        result = cli_runner.invoke(
            cli, ["-C", str(site), "convert", *IDENTITY_ARGS, "--no-default-rules"]
        )

        assert result.exit_code == 0, result.output
        assert rule_matches(site / "AppxManifest.xml") == [
            "https://api.example.com/",
            "https://example.com/",
        ]

    def test_convert_identity_from_config(self, cli_runner: CliRunner, site: Path) -> None:
        """Test reading the package identity from appx.toml."""
        (site / "appx.toml").write_text(
            'identity_name = "Config.App"\n'
            'publisher = "CN=Config"\n'
            'publisher_display_name = "Config Inc"\n'
            "default_rules = false\n"
            'output = "build/AppxManifest.xml"\n'
        )

        result = cli_runner.invoke(cli, ["-C", str(site), "convert"])

        assert result.exit_code == 0, result.output
        output = site / "build" / "AppxManifest.xml"
        root = ET.parse(output).getroot()
        assert root.find(f"{FOUNDATION}Identity").get("Publisher") == "CN=Config"
        assert len(rule_matches(output)) == 2

    def test_convert_missing_identity(self, cli_runner: CliRunner, site: Path) -> None:
        """Test that a missing identity is a usage error."""
        result = cli_runner.invoke(cli, ["-C", str(site), "convert", "--publisher", "CN=Contoso"])

        assert result.exit_code == 2
        assert "--identity-name" in result.output
        assert "--publisher-display-name" in result.output

    def test_convert_missing_manifest(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        """Test converting a manifest that does not exist."""
        result = cli_runner.invoke(cli, ["-C", str(tmp_path), "convert", *IDENTITY_ARGS])

        assert result.exit_code == 1
        assert "1 (ManifestNotFound)" in result.output

    def test_convert_no_icons(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        """Test converting a manifest without icons."""
        (tmp_path / "manifest.json").write_text(json.dumps({"start_url": "https://example.com/"}))

        result = cli_runner.invoke(cli, ["-C", str(tmp_path), "convert", *IDENTITY_ARGS])

        assert result.exit_code == 1
        assert "6 (NoIconsFound)" in result.output
        assert not (tmp_path / "AppxManifest.xml").exists()

    def test_convert_invalid_json(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        """Test converting a manifest that is not JSON."""
        (tmp_path / "manifest.json").write_text("{not json")

        result = cli_runner.invoke(cli, ["-C", str(tmp_path), "convert", *IDENTITY_ARGS])

        assert result.exit_code == 1
        assert "Manifest validation failed" in result.output

    def test_convert_chrome_manifest(self, cli_runner: CliRunner, chrome_site: Path) -> None:
        """Test converting a Chrome hosted-app manifest."""
        result = cli_runner.invoke(
            cli, ["-C", str(chrome_site), "convert", *IDENTITY_ARGS, "--no-default-rules"]
        )

        assert result.exit_code == 0, result.output
        assert (chrome_site / "icon128_scaled_50x50.png").exists()
        assert rule_matches(chrome_site / "AppxManifest.xml") == [
            "https://example.com/",
            "https://*.example.com/",
            "https://www.example.com/",
        ]

    def test_convert_verbose_logs_rules(self, cli_runner: CliRunner, site: Path) -> None:
        """Test that -v enables informational logging."""
        result = cli_runner.invoke(cli, ["-v", "-C", str(site), "convert", *IDENTITY_ARGS])

        assert result.exit_code == 0, result.output
        assert "Access Rule added" in result.output
