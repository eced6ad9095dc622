# SPDX-License-Identifier: MIT
"""Selection and synthesis of the canonical package images.

A package needs exactly four images: the store logo (50x50), the small logo
(44x44), the large logo (150x150) and the splash screen (620x300). Each one is
taken from the manifest when an icon of exactly that size is declared, and is
otherwise generated from the closest-sized icon and written beside it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Optional, Sequence

from PIL import Image

from .errors import (
    IconNotFoundError,
    NoIconsFoundError,
    RelativePathExpectedError,
    RelativePathReferencesParentDirectoryError,
)
from .models import Icon

logger = logging.getLogger(__name__)

LEADING_SEPARATOR = re.compile(r"^[/\\]")

# Suffix of generated file names: <stem>_scaled_<w>x<h>.png
SCALED_SUFFIX = "_scaled_{width}x{height}.png"


@dataclass(frozen=True, slots=True)
class AssetSlot:
    """A canonical image the package descriptor requires."""

    name: str
    width: int
    height: int

    @property
    def sizes(self) -> str:
        return f"{self.width}x{self.height}"


STORE_LOGO = AssetSlot("store_logo", 50, 50)
SMALL_LOGO = AssetSlot("small_logo", 44, 44)
LARGE_LOGO = AssetSlot("large_logo", 150, 150)
SPLASH_SCREEN = AssetSlot("splash_screen", 620, 300)

CANONICAL_SLOTS: tuple[AssetSlot, ...] = (STORE_LOGO, SMALL_LOGO, LARGE_LOGO, SPLASH_SCREEN)


@dataclass(frozen=True)
class ResolvedAssets:
    """The four canonical images of a package.

    Attributes:
        store_logo: 50x50 store logo
        small_logo: 44x44 logo
        large_logo: 150x150 logo
        splash_screen: 620x300 splash image
        generated: Files written while resolving, in creation order
    """

    store_logo: Icon
    small_logo: Icon
    large_logo: Icon
    splash_screen: Icon
    generated: tuple[Path, ...] = field(default_factory=tuple)


def sanitize_image_path(path: str) -> str:
    """Remove a single leading path separator."""
    return LEADING_SEPARATOR.sub("", path)


def normalize_image_path(path: str) -> str:
    """Strip a leading separator and use forward slashes throughout."""
    return sanitize_image_path(path).replace("\\", "/")


def is_absolute_path(path: str) -> bool:
    """Check for a rooted path in either POSIX or Windows notation."""
    return (
        PurePosixPath(path).is_absolute()
        or PureWindowsPath(path).is_absolute()
        or path.startswith("\\")
    )


def validate_icon(icon: Icon, asset_root: Path) -> None:
    """Check that an icon references an existing file inside the asset root.

    Raises:
        RelativePathReferencesParentDirectoryError: If the path contains ".."
        RelativePathExpectedError: If the path is absolute
        IconNotFoundError: If the file does not exist
    """
    if ".." in icon.src:
        raise RelativePathReferencesParentDirectoryError(icon.src)

    if is_absolute_path(icon.src):
        raise RelativePathExpectedError(icon.src)

    if not (asset_root / normalize_image_path(icon.src)).is_file():
        raise IconNotFoundError(icon.src)


def find_exact_match(slot: AssetSlot, icons: Sequence[Icon]) -> Optional[Icon]:
    """Return the last icon whose sizes value is exactly the slot's size.

    The whole sizes string is compared, so "48x48 150x150" matches no slot.
    """
    match: Optional[Icon] = None
    for icon in icons:
        if (icon.sizes or "").strip() == slot.sizes:
            match = icon
    return match


def find_nearest_icon(width: int, height: int, icons: Sequence[Icon]) -> Optional[Icon]:
    """Return the icon minimizing max(|dw|, |dh|) against the target size.

    Ties resolve to the icon declared first. Icons without a usable size are
    skipped.
    """
    best: Optional[Icon] = None
    best_delta: Optional[int] = None

    for icon in icons:
        dimensions = icon.dimensions
        if dimensions is None:
            continue
        icon_width, icon_height = dimensions
        delta = max(abs(icon_width - width), abs(icon_height - height))
        if best_delta is None or delta < best_delta:
            best = icon
            best_delta = delta

    return best


def scaled_image_name(src: str, width: int, height: int) -> str:
    stem = PurePosixPath(normalize_image_path(src)).stem
    return stem + SCALED_SUFFIX.format(width=width, height=height)


def resize_icon(icon: Icon, width: int, height: int, asset_root: Path) -> tuple[Icon, Path]:
    """Generate a width x height PNG from an icon and write it beside the source.

    Images larger than the target in either dimension are stretched to exactly
    fit it. Smaller images are centered unscaled on a transparent canvas.

    Returns:
        The new icon (path relative to the asset root) and the written file
    """
    relative_src = PurePosixPath(normalize_image_path(icon.src))
    source_path = asset_root / relative_src
    out_name = scaled_image_name(icon.src, width, height)
    out_path = source_path.parent / out_name

    with Image.open(source_path) as source_image, source_image.convert("RGBA") as image:
        if image.width > width or image.height > height:
            with image.resize((width, height), Image.BICUBIC) as scaled:
                scaled.save(out_path, format="PNG")
        else:
            with Image.new("RGBA", (width, height), (0, 0, 0, 0)) as canvas:
                offset = ((width - image.width) // 2, (height - image.height) // 2)
                canvas.paste(image, offset)
                canvas.save(out_path, format="PNG")

    logger.debug("Generated %s from %s", out_path, source_path)
    return Icon(src=str(relative_src.parent / out_name), sizes=f"{width}x{height}"), out_path


def resolve_assets(icons: Sequence[Icon], asset_root: str | Path) -> ResolvedAssets:
    """Establish the four canonical package images.

    Args:
        icons: Icons declared by the manifest, in declaration order
        asset_root: Directory the icon paths are relative to

    Returns:
        ResolvedAssets with one icon per canonical slot

    Raises:
        NoIconsFoundError: If no icon is declared or none has a usable size
        RelativePathReferencesParentDirectoryError: If an icon path contains ".."
        RelativePathExpectedError: If an icon path is absolute
        IconNotFoundError: If an icon file does not exist
    """
    root = Path(asset_root)

    if not icons:
        raise NoIconsFoundError()

    for icon in icons:
        validate_icon(icon, root)

    resolved: dict[str, Icon] = {}
    generated: list[Path] = []

    for slot in CANONICAL_SLOTS:
        match = find_exact_match(slot, icons)
        if match is not None:
            resolved[slot.name] = Icon(src=normalize_image_path(match.src), sizes=slot.sizes)
            continue

        nearest = find_nearest_icon(slot.width, slot.height, icons)
        if nearest is None:
            raise NoIconsFoundError()
        resolved[slot.name], written = resize_icon(nearest, slot.width, slot.height, root)
        generated.append(written)

    logger.info("Established assets:")
    logger.info("Store Logo: %s", resolved[STORE_LOGO.name].src)
    logger.info("Small Logo: %s", resolved[SMALL_LOGO.name].src)
    logger.info("Large Logo: %s", resolved[LARGE_LOGO.name].src)
    logger.info("Splash Screen: %s", resolved[SPLASH_SCREEN.name].src)

    return ResolvedAssets(
        store_logo=resolved[STORE_LOGO.name],
        small_logo=resolved[SMALL_LOGO.name],
        large_logo=resolved[LARGE_LOGO.name],
        splash_screen=resolved[SPLASH_SCREEN.name],
        generated=tuple(generated),
    )
