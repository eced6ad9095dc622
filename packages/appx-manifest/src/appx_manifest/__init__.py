# SPDX-License-Identifier: MIT
"""Conversion of web app manifests into Appx package descriptors.

This package converts W3C web app manifests and Chrome hosted-app manifests
into the AppxManifest.xml descriptor used to package a hosted web app:
- Format detection and normalization into a canonical manifest
- Selection or generation of the four canonical package images
- Derivation of the content URI access rules from the app's scope
- Sanitization of display names into application ids

Example:
    >>> from appx_manifest import IdentityAttributes, convert
    >>>
    >>> identity = IdentityAttributes("Contoso.App", "CN=Contoso", "Contoso")
    >>> descriptor = convert(manifest_json, identity, asset_root="site/")
    >>> descriptor.write("site/AppxManifest.xml")
"""

__version__ = "0.1.0"

from .access_rules import (
    DEFAULT_ACCESS_RULES,
    build_access_rules,
    compute_base_pattern,
    dedupe_rules,
    derive_origin_rules,
)
from .assets import CANONICAL_SLOTS, AssetSlot, ResolvedAssets, find_nearest_icon, resolve_assets
from .converter import ConvertOptions, ManifestConverter, convert
from .descriptor import FIXED_CAPABILITIES, PackageDescriptor, xml_text
from .domain import Domain, parse_domain
from .errors import (
    ERROR_CATALOG,
    AppxCreationFailedError,
    ConversionError,
    DomainParsingFailedError,
    ErrorCode,
    ErrorDefinition,
    IconNotFoundError,
    LaunchUrlNotSpecifiedError,
    ManifestError,
    ManifestNotFoundError,
    ManifestValidationError,
    NoIconsFoundError,
    RelativePathExpectedError,
    RelativePathReferencesParentDirectoryError,
    Severity,
    StartUrlNotSpecifiedError,
    UnsupportedProtocolError,
    ValidationErrorDetail,
    ValidationResult,
)
from .identity import IDENTITY_REWRITE_RULES, sanitize_identity_name
from .models import AccessRule, CanonicalManifest, Icon, IdentityAttributes, SourceFormat, first_non_empty
from .normalizer import detect_format, normalize_manifest, normalize_manifest_dict, resolve_start_url
from .schema import validate_manifest_shape

__all__ = [
    # Model
    "AccessRule",
    "CanonicalManifest",
    "Icon",
    "IdentityAttributes",
    "SourceFormat",
    "first_non_empty",
    # Conversion
    "ConvertOptions",
    "ManifestConverter",
    "convert",
    "PackageDescriptor",
    "FIXED_CAPABILITIES",
    "xml_text",
    # Normalization
    "detect_format",
    "normalize_manifest",
    "normalize_manifest_dict",
    "resolve_start_url",
    "validate_manifest_shape",
    # Assets
    "AssetSlot",
    "CANONICAL_SLOTS",
    "ResolvedAssets",
    "find_nearest_icon",
    "resolve_assets",
    # Access rules
    "DEFAULT_ACCESS_RULES",
    "build_access_rules",
    "compute_base_pattern",
    "dedupe_rules",
    "derive_origin_rules",
    "Domain",
    "parse_domain",
    # Identity
    "IDENTITY_REWRITE_RULES",
    "sanitize_identity_name",
    # Errors
    "ERROR_CATALOG",
    "ErrorCode",
    "ErrorDefinition",
    "Severity",
    "ManifestError",
    "ManifestValidationError",
    "ValidationErrorDetail",
    "ValidationResult",
    "ConversionError",
    "ManifestNotFoundError",
    "StartUrlNotSpecifiedError",
    "AppxCreationFailedError",
    "LaunchUrlNotSpecifiedError",
    "DomainParsingFailedError",
    "NoIconsFoundError",
    "RelativePathReferencesParentDirectoryError",
    "RelativePathExpectedError",
    "UnsupportedProtocolError",
    "IconNotFoundError",
]
