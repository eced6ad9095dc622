# SPDX-License-Identifier: MIT
"""CLI entry point for the appx command."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from appx_manifest import ConversionError, ManifestError, ManifestValidationError

from .config import CLIConfig, ConfigError, load_config

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.config: Optional[CLIConfig] = None
        self.verbose: int = 0
        self.project_dir: Optional[Path] = None

    def load_config(
        self,
        config_path: Optional[Path] = None,
        start_dir: Optional[Path] = None,
    ) -> CLIConfig:
        """Load configuration, caching the result.

        The search starts at start_dir, falling back to the -C directory.
        """
        if self.config is None:
            self.config = load_config(start_dir or self.project_dir, config_path)
        return self.config

    def resolve_path(self, path: Path) -> Path:
        """Resolve a command line path against the -C directory."""
        if path.is_absolute() or self.project_dir is None:
            return path
        return self.project_dir / path


pass_context = click.make_pass_decorator(Context, ensure=True)


def echo_error(message: str) -> None:
    """Print an error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.secho(message, fg="green")


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.secho(f"Warning: {message}", fg="yellow", err=True)


def echo_manifest_error(error: ManifestError) -> None:
    """Print a conversion or validation failure."""
    if isinstance(error, ConversionError):
        echo_error(f"{error.code} ({error.type}): {error.format_message()}")
    elif isinstance(error, ManifestValidationError):
        echo_error(str(error))
        for detail in error.errors[1:]:
            click.secho(f"  {detail.field}: {detail.message}", fg="red", err=True)
    else:
        echo_error(str(error))


def configure_logging(verbose: int) -> None:
    """Route library log records to stderr at the requested verbosity."""
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


@click.group()
@click.version_option(package_name="appx-manifest")
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Enable verbose output (repeat for debug output).",
)
@click.option(
    "-C",
    "--directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Resolve paths and search for configuration relative to this directory.",
)
@pass_context
def cli(ctx: Context, verbose: int, directory: Optional[Path]) -> None:
    """Convert web app manifests into Appx packages.

    Reads a W3C web app manifest or a Chrome hosted-app manifest and produces
    the AppxManifest.xml package descriptor, optionally packing it with MakeAppx.

    \b
    Examples:
        appx convert manifest.json --identity-name Contoso.App --publisher CN=Contoso
        appx validate site/manifest.json
        appx package site/manifest.json -o dist/app.appx
    """
    ctx.verbose = verbose
    ctx.project_dir = directory
    configure_logging(verbose)


# Import and register commands
from .commands import convert, package, validate

cli.add_command(convert.convert)
cli.add_command(validate.validate)
cli.add_command(package.package)


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except ConfigError as e:
        echo_error(str(e))
        sys.exit(1)
    except FileNotFoundError as e:
        echo_error(str(e))
        sys.exit(1)
    except Exception as e:
        echo_error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
