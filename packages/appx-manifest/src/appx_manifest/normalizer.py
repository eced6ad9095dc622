# SPDX-License-Identifier: MIT
"""Normalize W3C and Chrome hosted-app manifests into the canonical model.

A manifest with a top-level ``app`` member is a Chrome hosted app. Its launch
target, icon map, localized strings and URL list are converted into the
W3C-shaped canonical manifest. Any other manifest is read as W3C and passed
through; its defaults are applied when the descriptor is rendered.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

from .access_rules import DomainParser, dedupe_rules, derive_origin_rules
from .domain import parse_domain
from .errors import LaunchUrlNotSpecifiedError, ManifestValidationError, ValidationErrorDetail
from .models import (
    DEFAULT_API_ACCESS,
    AccessRule,
    CanonicalManifest,
    Icon,
    SourceFormat,
    first_non_empty,
)
from .schema import validate_manifest_shape_strict

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en-us"
DEFAULT_ORIENTATION = "portrait"
DEFAULT_THEME_COLOR = "aliceBlue"
DEFAULT_BACKGROUND_COLOR = "gray"

# Start URL prefix for content shipped inside the package
LOCAL_CONTENT_PREFIX = "ms-appx-web:///"

LOCALE_MESSAGES_PATH = "_locales/{locale}/messages.json"

# Chrome i18n placeholder, e.g. "__MSG_appName__"
MESSAGE_PLACEHOLDER = re.compile(r"^__msg_(.+)__$", re.IGNORECASE)


def parse_manifest_json(manifest_json: str) -> Any:
    """Decode manifest text.

    Raises:
        ManifestValidationError: If the text is not valid JSON
    """
    try:
        return json.loads(manifest_json)
    except json.JSONDecodeError as e:
        raise ManifestValidationError(
            [
                ValidationErrorDetail(
                    field="<root>",
                    message=f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})",
                )
            ]
        ) from e


def detect_format(manifest: Any) -> SourceFormat:
    """Detect the manifest flavour from the presence of a top-level ``app``."""
    if isinstance(manifest, dict) and manifest.get("app") is not None:
        return SourceFormat.CHROME
    return SourceFormat.W3C


def resolve_start_url(launch: dict[str, Any]) -> str:
    """Resolve a Chrome app's start URL from its launch target.

    The web URL wins; a local path is served from the package content.

    Raises:
        LaunchUrlNotSpecifiedError: If neither target is given
    """
    start_url = launch.get("web_url") or ""
    local_path = launch.get("local_path") or ""

    if not start_url and local_path:
        start_url = LOCAL_CONTENT_PREFIX + local_path

    if not start_url:
        raise LaunchUrlNotSpecifiedError()

    return start_url


def load_locale_messages(asset_root: Path, locale: str) -> Optional[dict[str, Any]]:
    """Read ``_locales/<locale>/messages.json`` if it exists."""
    path = asset_root / LOCALE_MESSAGES_PATH.format(locale=locale)
    if not path.is_file():
        logger.debug("No messages for locale %s at %s", locale, path)
        return None

    try:
        messages = json.loads(path.read_text(encoding="utf-8-sig"))
    except json.JSONDecodeError as e:
        raise ManifestValidationError(
            [
                ValidationErrorDetail(
                    field=str(path),
                    message=f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})",
                )
            ]
        ) from e

    return messages if isinstance(messages, dict) else None


def lookup_message(messages: dict[str, Any], key: str) -> Optional[str]:
    """Find the message text for a key, preferring an exact key match."""
    entry = messages.get(key)
    if entry is None:
        folded = key.casefold()
        entry = next((v for k, v in messages.items() if k.casefold() == folded), None)

    if isinstance(entry, dict) and isinstance(entry.get("message"), str):
        return entry["message"]
    return None


def localize_value(value: str, messages: dict[str, Any]) -> str:
    """Return the message a ``__MSG_<key>__`` placeholder refers to.

    Values that are not placeholders, or whose key has no message, are
    returned unchanged.
    """
    match = MESSAGE_PLACEHOLDER.match(value or "")
    if not match:
        return value

    message = lookup_message(messages, match.group(1))
    if message is None:
        logger.debug("No message for placeholder %s", value)
        return value

    return message.strip()


def apply_locale_messages(manifest: CanonicalManifest, messages: dict[str, Any]) -> None:
    """Replace ``__MSG_<key>__`` placeholders in the localizable fields."""
    manifest.language = localize_value(manifest.language, messages)
    manifest.name = localize_value(manifest.name, messages)
    manifest.short_name = localize_value(manifest.short_name, messages)
    manifest.description = localize_value(manifest.description, messages)
    manifest.start_url = localize_value(manifest.start_url, messages)
    manifest.scope = localize_value(manifest.scope, messages)
    manifest.display = localize_value(manifest.display, messages)
    manifest.orientation = localize_value(manifest.orientation, messages)
    manifest.theme_color = localize_value(manifest.theme_color, messages)
    manifest.background_color = localize_value(manifest.background_color, messages)
    manifest.store_version = localize_value(manifest.store_version, messages)


def normalize_chrome_manifest(
    manifest: dict[str, Any],
    asset_root: Path,
    parser: DomainParser = parse_domain,
) -> CanonicalManifest:
    """Convert a Chrome hosted-app manifest into the canonical model.

    Raises:
        LaunchUrlNotSpecifiedError: If the app has no launch target
        DomainParsingFailedError: If a declared URL cannot be parsed
        UnsupportedProtocolError: If a declared URL uses another scheme than http(s)
    """
    app = manifest.get("app") or {}
    start_url = resolve_start_url(app.get("launch") or {})
    name = manifest.get("name") or ""

    canonical = CanonicalManifest(
        language=first_non_empty(manifest.get("lang"), DEFAULT_LANGUAGE),
        name=name,
        short_name=first_non_empty(manifest.get("short_name"), name),
        description=manifest.get("description") or "",
        start_url=start_url,
        scope=manifest.get("scope") or "",
        display=manifest.get("display") or "",
        orientation=first_non_empty(manifest.get("orientation"), DEFAULT_ORIENTATION),
        theme_color=first_non_empty(manifest.get("theme_color"), DEFAULT_THEME_COLOR),
        background_color=first_non_empty(manifest.get("background_color"), DEFAULT_BACKGROUND_COLOR),
        store_version=manifest.get("store_version") or "",
        source_format=SourceFormat.CHROME,
    )

    default_locale = manifest.get("default_locale")
    if default_locale:
        messages = load_locale_messages(asset_root, default_locale)
        if messages is not None:
            apply_locale_messages(canonical, messages)

    canonical.icons = [
        Icon(src=path, sizes=f"{size}x{size}") for size, path in (manifest.get("icons") or {}).items()
    ]

    urls = [start_url, *(app.get("urls") or [])]
    canonical.access_rules = derive_origin_rules(urls, parser)

    return canonical


def normalize_w3c_manifest(manifest: dict[str, Any]) -> CanonicalManifest:
    """Read a W3C manifest into the canonical model without applying defaults."""
    icons = [
        Icon(src=icon["src"], sizes=icon.get("sizes") or "") for icon in manifest.get("icons") or []
    ]
    rules = dedupe_rules(
        AccessRule(url=entry["url"], api_access=entry.get("apiAccess") or DEFAULT_API_ACCESS)
        for entry in manifest.get("mjs_access_whitelist") or []
    )

    return CanonicalManifest(
        language=manifest.get("lang") or "",
        name=manifest.get("name") or "",
        short_name=manifest.get("short_name") or "",
        description=manifest.get("description") or "",
        start_url=manifest.get("start_url") or "",
        scope=manifest.get("scope") or "",
        display=manifest.get("display") or "",
        orientation=manifest.get("orientation") or "",
        theme_color=manifest.get("theme_color") or "",
        background_color=manifest.get("background_color") or "",
        store_version=manifest.get("store_version") or "",
        icons=icons,
        access_rules=rules,
        source_format=SourceFormat.W3C,
    )


def normalize_manifest_dict(
    manifest: Any,
    asset_root: str | Path = ".",
    parser: DomainParser = parse_domain,
) -> CanonicalManifest:
    """Normalize an already decoded manifest.

    Args:
        manifest: Decoded manifest JSON
        asset_root: Directory holding the manifest's icons and ``_locales``
        parser: Domain parser used for the Chrome URL list

    Returns:
        The canonical manifest

    Raises:
        ManifestValidationError: If the manifest does not have the expected shape
        ConversionError: For Chrome launch or URL problems
    """
    source_format = detect_format(manifest)
    logger.debug("Detected %s manifest", source_format.value)

    validate_manifest_shape_strict(manifest, source_format)

    if source_format is SourceFormat.CHROME:
        return normalize_chrome_manifest(manifest, Path(asset_root), parser)
    return normalize_w3c_manifest(manifest)


def normalize_manifest(
    manifest_json: str,
    asset_root: str | Path = ".",
    parser: DomainParser = parse_domain,
) -> CanonicalManifest:
    """Decode manifest text and normalize it into the canonical model."""
    return normalize_manifest_dict(parse_manifest_json(manifest_json), asset_root, parser)
