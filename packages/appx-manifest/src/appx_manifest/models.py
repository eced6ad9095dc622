# SPDX-License-Identifier: MIT
"""Data model shared by the conversion components.

The canonical manifest is the format-agnostic representation that both the
W3C and the Chrome hosted-app manifests are normalized into before rendering.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

# Access level applied when a rule does not specify one
DEFAULT_API_ACCESS = "none"

# A single "WxH" token inside an icon's sizes attribute
SIZE_PATTERN = re.compile(r"^(\d+)[xX](\d+)$")


class SourceFormat(str, Enum):
    """Manifest flavours accepted by the converter."""

    W3C = "w3c"
    CHROME = "chrome"


def first_non_empty(*candidates: Optional[str]) -> str:
    """Return the first candidate that is neither None nor an empty string.

    Candidates are evaluated in the order given, so the argument order is the
    precedence order. Returns an empty string when every candidate is empty.
    """
    for candidate in candidates:
        if candidate:
            return candidate
    return ""


def parse_size(sizes: str) -> Optional[tuple[int, int]]:
    """Parse the first usable ``WxH`` token of a sizes attribute.

    Args:
        sizes: Value such as "48x48" or "48x48 96x96"

    Returns:
        (width, height), or None when no token describes positive dimensions
    """
    for token in (sizes or "").split():
        match = SIZE_PATTERN.match(token)
        if match:
            width, height = int(match.group(1)), int(match.group(2))
            if width > 0 and height > 0:
                return width, height
    return None


@dataclass(frozen=True, slots=True)
class Icon:
    """An image declared by the manifest.

    Attributes:
        src: Path of the image relative to the asset root
        sizes: Dimensions as "WxH"
    """

    src: str
    sizes: str

    @property
    def dimensions(self) -> Optional[tuple[int, int]]:
        return parse_size(self.sizes)


@dataclass(frozen=True, slots=True)
class AccessRule:
    """An origin pattern and the runtime access granted to it.

    Attributes:
        url: Origin pattern, possibly ending in a wildcard suffix
        api_access: Runtime access level ("none", "all", ...)
    """

    url: str
    api_access: str = DEFAULT_API_ACCESS


@dataclass(frozen=True, slots=True)
class IdentityAttributes:
    """Package identity supplied by the caller.

    Attributes:
        identity_name: Package identity name (used as given)
        publisher_identity: Publisher subject, e.g. "CN=Contoso"
        publisher_display_name: Human-readable publisher name
    """

    identity_name: str
    publisher_identity: str
    publisher_display_name: str


@dataclass
class CanonicalManifest:
    """W3C-shaped manifest that every source format is normalized into."""

    language: str = ""
    name: str = ""
    short_name: str = ""
    description: str = ""
    start_url: str = ""
    scope: str = ""
    display: str = ""
    orientation: str = ""
    theme_color: str = ""
    background_color: str = ""
    store_version: str = ""
    icons: list[Icon] = field(default_factory=list)
    access_rules: list[AccessRule] = field(default_factory=list)
    source_format: SourceFormat = SourceFormat.W3C
