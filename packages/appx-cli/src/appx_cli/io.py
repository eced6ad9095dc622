# SPDX-License-Identifier: MIT
"""Reading manifests from disk."""

from __future__ import annotations

from pathlib import Path

from appx_manifest import ManifestNotFoundError


def read_manifest_text(manifest_path: str | Path) -> str:
    """Read a manifest file as text.

    Raises:
        ManifestNotFoundError: If no file exists at the path
    """
    path = Path(manifest_path)
    if not path.is_file():
        raise ManifestNotFoundError(str(path))
    return path.read_text(encoding="utf-8-sig")
