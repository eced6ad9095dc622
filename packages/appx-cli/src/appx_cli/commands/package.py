# SPDX-License-Identifier: MIT
"""Convert a manifest and pack the result with MakeAppx."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from appx_manifest import ManifestError

from ..main import Context, echo_info, echo_manifest_error, echo_success, pass_context
from ..packager import make_appx
from .common import conversion_options, run_conversion

DEFAULT_PACKAGE_SUFFIX = ".appx"


@click.command()
@conversion_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Package output path (defaults to <identity name>.appx beside the asset root).",
)
@click.option(
    "--makeappx",
    help="MakeAppx executable (defaults to the configured value or 'makeappx').",
)
@pass_context
def package(
    ctx: Context,
    manifest: Path,
    identity_name: Optional[str],
    publisher: Optional[str],
    publisher_display_name: Optional[str],
    asset_root: Optional[Path],
    no_default_rules: bool,
    config_path: Optional[Path],
    output: Optional[Path],
    makeappx: Optional[str],
) -> None:
    """Write AppxManifest.xml into the asset root and pack it.

    The asset root becomes the package content directory.

    \b
    Examples:
        appx package                               # Package ./manifest.json
        appx package -o dist/app.appx              # Custom package path
        appx package --makeappx "C:/SDK/makeappx"  # Explicit packager
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

        descriptor_path = descriptor.write(root / config.output)
        echo_info(f"Wrote {descriptor_path}")

        if output:
            package_path = ctx.resolve_path(output)
        else:
            package_path = root.parent / f"{descriptor.identity_name}{DEFAULT_PACKAGE_SUFFIX}"

        created = make_appx(root, package_path, makeappx or config.makeappx)
    except ManifestError as e:
        echo_manifest_error(e)
        raise SystemExit(1)

    echo_success(f"Created package: {created}")
