# SPDX-License-Identifier: MIT
"""Convert web app manifests into package descriptors.

This module ties the conversion together: the manifest is normalized, the
canonical images are resolved, the access rules are computed and everything
is assembled into a :class:`PackageDescriptor`.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Sequence

from . import __version__
from .access_rules import DEFAULT_ACCESS_RULES, DomainParser, build_access_rules
from .assets import resolve_assets
from .descriptor import PackageDescriptor
from .domain import parse_domain
from .errors import NoIconsFoundError, StartUrlNotSpecifiedError
from .identity import sanitize_identity_name
from .models import AccessRule, CanonicalManifest, IdentityAttributes, first_non_empty
from .normalizer import (
    DEFAULT_LANGUAGE,
    DEFAULT_ORIENTATION,
    DEFAULT_THEME_COLOR,
    normalize_manifest,
    normalize_manifest_dict,
)

logger = logging.getLogger(__name__)

PRODUCT_NAME = "appx-manifest"
DEFAULT_PACKAGE_VERSION = "1.0.0.0"

# Namespace for the stable package ids derived from the identity
PACKAGE_ID_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "urn:appx-manifest:package")


@dataclass
class ConvertOptions:
    """Per-conversion settings.

    Attributes:
        default_access_rules: Rules emitted ahead of the manifest's own rules
        product_name: Tool name recorded in the build metadata
        tool_version: Tool version recorded in the build metadata
        generated_at: Generation timestamp (defaults to now, UTC)
    """

    default_access_rules: Sequence[AccessRule] = DEFAULT_ACCESS_RULES
    product_name: str = PRODUCT_NAME
    tool_version: str = __version__
    generated_at: Optional[datetime] = None


def stable_package_id(identity: IdentityAttributes) -> str:
    """Derive a package id that stays the same across conversions."""
    return str(
        uuid.uuid5(PACKAGE_ID_NAMESPACE, f"{identity.publisher_identity}|{identity.identity_name}")
    )


def _format_timestamp(moment: Optional[datetime]) -> str:
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


class ManifestConverter:
    """Converts manifests whose assets live under one root directory.

    Example:
        >>> converter = ManifestConverter("site/")
        >>> descriptor = converter.convert(manifest_json, identity)
        >>> descriptor.write("site/AppxManifest.xml")
    """

    def __init__(
        self,
        asset_root: str | Path = ".",
        options: Optional[ConvertOptions] = None,
        parser: DomainParser = parse_domain,
    ) -> None:
        self.asset_root = Path(asset_root)
        self.options = options or ConvertOptions()
        self.parser = parser

    def convert(self, manifest_json: str, identity: IdentityAttributes) -> PackageDescriptor:
        """Convert manifest text (W3C or Chrome) into a package descriptor.

        Raises:
            ManifestValidationError: If the manifest is not valid JSON or has the wrong shape
            ConversionError: For any catalog failure; no descriptor is produced
        """
        manifest = normalize_manifest(manifest_json, self.asset_root, self.parser)
        return self.convert_canonical(manifest, identity)

    def convert_dict(self, manifest: dict[str, Any], identity: IdentityAttributes) -> PackageDescriptor:
        """Convert an already decoded manifest into a package descriptor."""
        canonical = normalize_manifest_dict(manifest, self.asset_root, self.parser)
        return self.convert_canonical(canonical, identity)

    def convert_canonical(
        self,
        manifest: CanonicalManifest,
        identity: IdentityAttributes,
    ) -> PackageDescriptor:
        """Assemble the descriptor for a normalized manifest.

        Raises:
            StartUrlNotSpecifiedError: If the manifest has no start URL
            NoIconsFoundError: If the manifest declares no icons
        """
        if not manifest.start_url:
            raise StartUrlNotSpecifiedError()

        if not manifest.icons:
            raise NoIconsFoundError()

        assets = resolve_assets(manifest.icons, self.asset_root)
        rules = build_access_rules(
            manifest.access_rules,
            manifest.start_url,
            manifest.scope,
            default_rules=self.options.default_access_rules,
            parser=self.parser,
        )

        short_name = first_non_empty(manifest.short_name, manifest.name)
        application_id = sanitize_identity_name(short_name)
        if not application_id:
            logger.warning("Application id derived from %r is empty", short_name)

        return PackageDescriptor(
            identity_name=identity.identity_name,
            version=first_non_empty(manifest.store_version, DEFAULT_PACKAGE_VERSION),
            publisher=identity.publisher_identity,
            phone_product_id=stable_package_id(identity),
            generated_from=self.options.product_name,
            generation_date=_format_timestamp(self.options.generated_at),
            tool_version=self.options.tool_version,
            display_name=short_name,
            publisher_display_name=identity.publisher_display_name,
            logo=assets.store_logo.src,
            language=first_non_empty(manifest.language, DEFAULT_LANGUAGE),
            application_id=application_id,
            start_page=manifest.start_url,
            access_rules=tuple(rules),
            description=first_non_empty(manifest.description, manifest.name),
            background_color=first_non_empty(manifest.theme_color, DEFAULT_THEME_COLOR),
            square150x150_logo=assets.large_logo.src,
            square44x44_logo=assets.small_logo.src,
            splash_screen=assets.splash_screen.src,
            rotation_preference=first_non_empty(manifest.orientation, DEFAULT_ORIENTATION),
        )


def convert(
    manifest_json: str,
    identity: IdentityAttributes,
    asset_root: str | Path = ".",
    options: Optional[ConvertOptions] = None,
) -> PackageDescriptor:
    """Convert manifest text into a package descriptor.

    Args:
        manifest_json: W3C or Chrome hosted-app manifest text
        identity: Package identity supplied by the caller
        asset_root: Directory the manifest's relative paths resolve against
        options: Optional conversion settings

    Returns:
        The assembled PackageDescriptor

    Raises:
        ManifestValidationError: If the manifest is not valid JSON or has the wrong shape
        ConversionError: For any catalog failure
    """
    return ManifestConverter(asset_root, options).convert(manifest_json, identity)
