# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for manifest conversion tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from appx_manifest import IdentityAttributes

# Solid opaque color used for generated test images
ICON_COLOR = (200, 30, 30, 255)

CANONICAL_ICONS = [
    {"src": "images/store.png", "sizes": "50x50"},
    {"src": "images/small.png", "sizes": "44x44"},
    {"src": "images/large.png", "sizes": "150x150"},
    {"src": "images/splash.png", "sizes": "620x300"},
]


@pytest.fixture
def asset_root(tmp_path: Path) -> Path:
    """Create an empty site directory."""
    root = tmp_path / "site"
    root.mkdir()
    return root


@pytest.fixture
def make_image(asset_root: Path) -> Callable[[str, int, int], Path]:
    """Return a factory writing a solid PNG under the asset root."""

    def _make(relative: str, width: int, height: int) -> Path:
        path = asset_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        with Image.new("RGBA", (width, height), ICON_COLOR) as image:
            image.save(path, format="PNG")
        return path

    return _make


@pytest.fixture
def canonical_icons(make_image: Callable[[str, int, int], Path]) -> list[dict[str, str]]:
    """Write one image per canonical size and return their manifest entries."""
    for icon in CANONICAL_ICONS:
        width, height = (int(part) for part in icon["sizes"].split("x"))
        make_image(icon["src"], width, height)
    return [dict(icon) for icon in CANONICAL_ICONS]


@pytest.fixture
def identity() -> IdentityAttributes:
    """Package identity used by conversion tests."""
    return IdentityAttributes(
        identity_name="Contoso.DemoApp",
        publisher_identity="CN=Contoso",
        publisher_display_name="Contoso Ltd",
    )
