# SPDX-License-Identifier: MIT
"""Options and helpers shared by the conversion commands."""

from __future__ import annotations

import functools
from pathlib import Path
from typing import Callable, Optional

import click

from appx_manifest import ConvertOptions, IdentityAttributes, ManifestConverter, PackageDescriptor

from ..config import CLIConfig, ConfigError
from ..io import read_manifest_text
from ..main import Context


def conversion_options(func: Callable) -> Callable:
    """Attach the manifest argument and identity/conversion options."""

    @click.argument(
        "manifest",
        type=click.Path(dir_okay=False, path_type=Path),
        default="manifest.json",
    )
    @click.option(
        "--identity-name",
        help="Package identity name (e.g. Contoso.MyApp).",
    )
    @click.option(
        "--publisher",
        help="Publisher identity (e.g. CN=Contoso).",
    )
    @click.option(
        "--publisher-display-name",
        help="Publisher display name.",
    )
    @click.option(
        "--asset-root",
        type=click.Path(file_okay=False, path_type=Path),
        help="Directory icon paths are relative to (defaults to the manifest's directory).",
    )
    @click.option(
        "--no-default-rules",
        is_flag=True,
        help="Omit the built-in sign-in provider access rules.",
    )
    @click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Configuration file (appx.toml or pyproject.toml).",
    )
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return func(*args, **kwargs)

    return wrapper


def resolve_identity(
    config: CLIConfig,
    identity_name: Optional[str],
    publisher: Optional[str],
    publisher_display_name: Optional[str],
) -> IdentityAttributes:
    """Combine command line identity values with the configuration.

    Raises:
        click.UsageError: If any identity value is missing
    """
    identity = IdentityAttributes(
        identity_name=identity_name or config.identity_name,
        publisher_identity=publisher or config.publisher,
        publisher_display_name=publisher_display_name or config.publisher_display_name,
    )

    missing = [
        option
        for option, value in (
            ("--identity-name", identity.identity_name),
            ("--publisher", identity.publisher_identity),
            ("--publisher-display-name", identity.publisher_display_name),
        )
        if not value
    ]
    if missing:
        raise click.UsageError(
            f"Missing package identity: {', '.join(missing)} "
            "(pass the option or set it in appx.toml)"
        )

    return identity


def run_conversion(
    ctx: Context,
    manifest: Path,
    identity_name: Optional[str],
    publisher: Optional[str],
    publisher_display_name: Optional[str],
    asset_root: Optional[Path],
    no_default_rules: bool,
    config_path: Optional[Path],
) -> tuple[PackageDescriptor, Path, CLIConfig]:
    """Read the manifest and convert it.

    Returns:
        The descriptor, the asset root and the loaded configuration

    Raises:
        ManifestError: If reading or converting the manifest fails
        ConfigError: If the configuration is invalid
    """
    manifest_path = ctx.resolve_path(manifest)
    try:
        config = ctx.load_config(config_path, manifest_path.parent)
    except FileNotFoundError as e:
        raise ConfigError(str(e)) from e

    identity = resolve_identity(config, identity_name, publisher, publisher_display_name)
    root = ctx.resolve_path(asset_root) if asset_root else manifest_path.parent

    options = ConvertOptions()
    if no_default_rules or not config.default_rules:
        options.default_access_rules = ()

    manifest_json = read_manifest_text(manifest_path)
    descriptor = ManifestConverter(root, options).convert(manifest_json, identity)
    return descriptor, root, config
