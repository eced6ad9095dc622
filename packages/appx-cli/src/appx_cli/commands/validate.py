# SPDX-License-Identifier: MIT
"""Validate that a manifest converts cleanly."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from appx_manifest import ManifestError

from ..main import Context, echo_info, echo_manifest_error, echo_success, pass_context
from .common import conversion_options, run_conversion


@click.command()
@conversion_options
@pass_context
def validate(
    ctx: Context,
    manifest: Path,
    identity_name: Optional[str],
    publisher: Optional[str],
    publisher_display_name: Optional[str],
    asset_root: Optional[Path],
    no_default_rules: bool,
    config_path: Optional[Path],
) -> None:
    """Check that a manifest converts without writing the descriptor.

    Runs the full conversion, so missing images may still be generated in the
    asset root.

    \b
    Examples:
        appx validate                      # Validate ./manifest.json
        appx validate site/manifest.json   # Validate a specific manifest
    """
    echo_info(f"Validating: {ctx.resolve_path(manifest)}")

    try:
        descriptor, _, _ = run_conversion(
            ctx,
            manifest,
            identity_name,
            publisher,
            publisher_display_name,
            asset_root,
            no_default_rules,
            config_path,
        )
    except ManifestError as e:
        echo_manifest_error(e)
        raise SystemExit(1)

    echo_success(
        f"Manifest is valid: {descriptor.display_name} "
        f"({len(descriptor.access_rules)} access rule(s))"
    )
