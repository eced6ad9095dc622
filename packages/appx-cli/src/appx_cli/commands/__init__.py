# SPDX-License-Identifier: MIT
"""CLI command implementations."""

from . import convert, package, validate

__all__ = ["convert", "package", "validate"]
