# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for CLI tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Generator

import pytest
from click.testing import CliRunner
from PIL import Image


def write_image(path: Path, width: int, height: int) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with Image.new("RGBA", (width, height), (0, 120, 215, 255)) as image:
        image.save(path, format="PNG")


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def site(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a site directory with a W3C manifest and all canonical icons."""
    site_dir = tmp_path / "site"
    site_dir.mkdir()

    icons = []
    for name, width, height in [
        ("store", 50, 50),
        ("small", 44, 44),
        ("large", 150, 150),
        ("splash", 620, 300),
    ]:
        write_image(site_dir / "images" / f"{name}.png", width, height)
        icons.append({"src": f"images/{name}.png", "sizes": f"{width}x{height}"})

    manifest = {
        "name": "Demo App",
        "short_name": "Demo",
        "start_url": "https://example.com/",
        "icons": icons,
        "mjs_access_whitelist": [{"url": "https://api.example.com/", "apiAccess": "none"}],
    }
    (site_dir / "manifest.json").write_text(json.dumps(manifest, indent=2))

    yield site_dir


@pytest.fixture
def chrome_site(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a site directory with a Chrome hosted-app manifest."""
    site_dir = tmp_path / "chrome"
    site_dir.mkdir()
    write_image(site_dir / "icon128.png", 128, 128)

    manifest = {
        "name": "Hosted",
        "icons": {"128": "icon128.png"},
        "app": {
            "urls": ["https://www.example.com/"],
            "launch": {"web_url": "https://www.example.com/"},
        },
    }
    (site_dir / "manifest.json").write_text(json.dumps(manifest))

    yield site_dir
