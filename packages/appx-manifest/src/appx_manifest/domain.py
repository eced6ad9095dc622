# SPDX-License-Identifier: MIT
"""URL decomposition into scheme, host, registrable domain and path.

Unlike ``urllib.parse`` this accepts the loose URL forms found in manifest
whitelists: scheme-less entries (``example.com/app``) and the ``*`` scheme
(``*://example.com/``). The registrable domain comes from the public suffix
list bundled with tldextract; the list is never fetched over the network.
"""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from urllib.parse import urlsplit

import tldextract

SCHEME_PATTERN = re.compile(r"^(\*|[A-Za-z][A-Za-z0-9+.\-]*)://")

_extractor = tldextract.TLDExtract(suffix_list_urls=(), cache_dir=None)


@dataclass(frozen=True, slots=True)
class Domain:
    """Components of a parsed URL.

    Every field is empty when the URL cannot be decomposed; callers detect
    failure by an empty ``domain_name``.
    """

    scheme: str = ""
    host_name: str = ""
    domain_name: str = ""
    path_name: str = ""

    @property
    def is_valid(self) -> bool:
        return bool(self.domain_name)


def _registrable_domain(host_name: str) -> str:
    try:
        ipaddress.ip_address(host_name)
        return host_name
    except ValueError:
        pass

    extracted = _extractor(host_name)
    if not extracted.domain or not extracted.suffix or "*" in extracted.domain:
        return ""
    return f"{extracted.domain}.{extracted.suffix}"


def parse_domain(url: str) -> Domain:
    """Decompose a URL.

    Args:
        url: Absolute URL, ``*://`` wildcard URL, or scheme-less host/path

    Returns:
        The parsed Domain; the scheme is lowercased and empty when absent

    Example:
        >>> parse_domain("https://www.example.co.uk/app/")
        Domain(scheme='https', host_name='www.example.co.uk', domain_name='example.co.uk', path_name='/app/')
    """
    text = (url or "").strip()
    if not text:
        return Domain()

    scheme = ""
    rest = text
    match = SCHEME_PATTERN.match(text)
    if match:
        scheme = match.group(1).lower()
        rest = text[match.end():]

    try:
        parts = urlsplit("//" + rest)
        host_name = parts.hostname or ""
    except ValueError:
        return Domain(scheme=scheme)

    path_name = parts.path
    if not host_name:
        return Domain(scheme=scheme, path_name=path_name)

    return Domain(
        scheme=scheme,
        host_name=host_name,
        domain_name=_registrable_domain(host_name),
        path_name=path_name,
    )
