# SPDX-License-Identifier: MIT
"""Invocation of the external MakeAppx packager."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from appx_manifest import AppxCreationFailedError

logger = logging.getLogger(__name__)


def build_makeappx_command(makeappx: str, content_dir: Path, output_path: Path) -> list[str]:
    """Build the ``makeappx pack`` command line."""
    return [makeappx, "pack", "/o", "/d", str(content_dir), "/p", str(output_path)]


def make_appx(content_dir: str | Path, output_path: str | Path, makeappx: str = "makeappx") -> Path:
    """Pack a directory holding AppxManifest.xml into an .appx package.

    Args:
        content_dir: Directory with the descriptor and the package content
        output_path: Path of the package to create
        makeappx: MakeAppx executable

    Returns:
        Path to the created package

    Raises:
        AppxCreationFailedError: If the packager cannot be run or fails
    """
    content = Path(content_dir)
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    cmd = build_makeappx_command(makeappx, content, output)
    logger.debug("Running %s", " ".join(cmd))

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        raise AppxCreationFailedError(f"executable not found: {makeappx}") from None
    except OSError as e:
        raise AppxCreationFailedError(str(e)) from e

    if result.returncode != 0:
        reason = (result.stderr or result.stdout or "").strip()
        raise AppxCreationFailedError(reason or f"exit status {result.returncode}")

    logger.info("Created %s", output)
    return output
