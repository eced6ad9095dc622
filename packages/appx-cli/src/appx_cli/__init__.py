# SPDX-License-Identifier: MIT
"""Command line interface for converting web app manifests into Appx packages."""

__version__ = "0.1.0"
