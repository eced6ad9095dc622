# SPDX-License-Identifier: MIT
"""Sanitization of display names into package application ids."""

from __future__ import annotations

import re

# Characters that may never appear in an application id
BANNED_CHARACTERS = re.compile(r"[^A-Za-z0-9.]")

# Rewrite rules applied in order, repeatedly, until the name stops shrinking
IDENTITY_REWRITE_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^[0-9]"), ""),  # leading digit
    (re.compile(r"^\."), ""),  # leading dot
    (re.compile(r"\.[0-9]"), "."),  # digit right after a dot
    (re.compile(r"\.\."), "."),  # consecutive dots
    (re.compile(r"\.$"), ""),  # trailing dot
)


def apply_rewrite_rules(
    value: str,
    rules: tuple[tuple[re.Pattern[str], str], ...] = IDENTITY_REWRITE_RULES,
) -> str:
    """Apply each rewrite rule once, in order."""
    for pattern, replacement in rules:
        value = pattern.sub(replacement, value)
    return value


def sanitize_identity_name(name: str) -> str:
    """Turn an arbitrary display string into a valid application id.

    Every character other than ASCII letters, digits and dots is removed, then
    the rewrite rules run to a fixed point. An empty result is possible; it is
    up to the caller to reject it.

    Example:
        >>> sanitize_identity_name("3.corp..name.")
        'corp.name'
        >>> sanitize_identity_name("My App 2!")
        'MyApp2'
    """
    sanitized = BANNED_CHARACTERS.sub("", name or "")

    while True:
        current_length = len(sanitized)
        sanitized = apply_rewrite_rules(sanitized)
        if len(sanitized) >= current_length:
            return sanitized
