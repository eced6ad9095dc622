# SPDX-License-Identifier: MIT
"""Convert a web app manifest into AppxManifest.xml."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from appx_manifest import ManifestError, PackageDescriptor

from ..main import Context, echo_info, echo_manifest_error, echo_success, echo_warning, pass_context
from .common import conversion_options, run_conversion


def echo_summary(descriptor: PackageDescriptor) -> None:
    """Print the key values of a converted descriptor."""
    echo_info(f"  Display name:   {descriptor.display_name}")
    echo_info(f"  Application id: {descriptor.application_id}")
    echo_info(f"  Version:        {descriptor.version}")
    echo_info(f"  Start page:     {descriptor.start_page}")
    echo_info(f"  Store logo:     {descriptor.logo}")
    echo_info(f"  Small logo:     {descriptor.square44x44_logo}")
    echo_info(f"  Large logo:     {descriptor.square150x150_logo}")
    echo_info(f"  Splash screen:  {descriptor.splash_screen}")
    echo_info(f"  Access rules:   {len(descriptor.access_rules)}")
    for rule in descriptor.access_rules:
        echo_info(f"    {rule.url} ({rule.api_access})")


@click.command()
@conversion_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Descriptor output path (defaults to AppxManifest.xml in the asset root).",
)
@pass_context
def convert(
    ctx: Context,
    manifest: Path,
    identity_name: Optional[str],
    publisher: Optional[str],
    publisher_display_name: Optional[str],
    asset_root: Optional[Path],
    no_default_rules: bool,
    config_path: Optional[Path],
    output: Optional[Path],
) -> None:
    """Convert a manifest into an AppxManifest.xml descriptor.

    MANIFEST is a W3C web app manifest or a Chrome hosted-app manifest
    (default: manifest.json). Icons referenced by the manifest are resolved
    against the asset root; missing image sizes are generated beside them.

    \b
    Examples:
        appx convert                                   # Convert ./manifest.json
        appx convert site/manifest.json -o out.xml     # Custom output path
        appx convert --no-default-rules                # Skip sign-in provider rules
    """
    try:
        descriptor, root, config = run_conversion(
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

    output_path = ctx.resolve_path(output) if output else root / config.output
    descriptor.write(output_path)

    echo_success(f"Wrote {output_path}")
    if not descriptor.application_id:
        echo_warning(f"Application id derived from '{descriptor.display_name}' is empty")
    echo_summary(descriptor)
