# SPDX-License-Identifier: MIT
"""Derivation of the origin access rules (content URI whitelist).

Two steps use this module. While normalizing a Chrome hosted-app manifest, the
declared URLs are expanded into origin rules for every allowed scheme. While
rendering the descriptor, the rule list is merged with the base scope rule,
which is derived from the start URL and the navigation scope and always comes
last.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from .domain import Domain, parse_domain
from .errors import DomainParsingFailedError, UnsupportedProtocolError
from .models import DEFAULT_API_ACCESS, AccessRule

logger = logging.getLogger(__name__)

DomainParser = Callable[[str], Domain]

# Rules matching everything are never emitted
WILDCARD_RULE = "*"
WILDCARD_SUFFIX = "/*"

# Origin prefixes generated per declared URL, keyed by its scheme
HTTP_ORIGIN_PREFIXES = ("http://", "http://*.", "https://", "https://*.")
HTTPS_ORIGIN_PREFIXES = ("https://", "https://*.")
HTTP_LIKE_SCHEMES = frozenset({"", "http", "*"})

# Sign-in providers commonly used by hosted apps
DEFAULT_ACCESS_RULES: tuple[AccessRule, ...] = (
    AccessRule("https://*.facebook.com/"),
    AccessRule("https://*.google.com/"),
    AccessRule("https://*.live.com/"),
    AccessRule("https://*.youtube.com/"),
)


def dedupe_rules(rules: Iterable[AccessRule]) -> list[AccessRule]:
    """Drop repeated (url, api_access) pairs, keeping first occurrences.

    The url comparison is case-sensitive.
    """
    seen: set[tuple[str, str]] = set()
    result: list[AccessRule] = []
    for rule in rules:
        key = (rule.url, rule.api_access)
        if key not in seen:
            seen.add(key)
            result.append(rule)
    return result


def origin_rules_for_url(url: str, parser: DomainParser = parse_domain) -> list[AccessRule]:
    """Expand one declared URL into origin rules for its registrable domain.

    Raises:
        DomainParsingFailedError: If the URL has no registrable domain
        UnsupportedProtocolError: If the scheme is not http, https or *
    """
    domain = parser(url)
    if not domain.domain_name:
        raise DomainParsingFailedError(url)

    if domain.scheme in HTTP_LIKE_SCHEMES:
        prefixes = HTTP_ORIGIN_PREFIXES
    elif domain.scheme == "https":
        prefixes = HTTPS_ORIGIN_PREFIXES
    else:
        raise UnsupportedProtocolError(domain.scheme)

    return [AccessRule(f"{prefix}{domain.domain_name}/", DEFAULT_API_ACCESS) for prefix in prefixes]


def derive_origin_rules(urls: Iterable[str], parser: DomainParser = parse_domain) -> list[AccessRule]:
    """Build the deduplicated origin rule list for a set of declared URLs."""
    rules: list[AccessRule] = []
    for url in urls:
        rules.extend(origin_rules_for_url(url, parser))
    return dedupe_rules(rules)


def strip_wildcard_suffix(url: str) -> str:
    if url.endswith(WILDCARD_SUFFIX):
        return url[: -len(WILDCARD_SUFFIX)]
    return url


def compute_base_pattern(start_url: str, scope: str = "", parser: DomainParser = parse_domain) -> str:
    """Compute the URL pattern that is considered inside the app.

    Without a scope this is the origin of the start URL. An absolute scope URL
    is used verbatim; any other scope is a path on the start URL's origin.

    Example:
        >>> compute_base_pattern("https://example.com/app/index.html", "/app/*")
        'https://example.com/app'

    Raises:
        DomainParsingFailedError: If the start URL has no scheme or host
    """
    start = parser(start_url)
    if not start.scheme or not start.host_name:
        raise DomainParsingFailedError(start_url)

    origin = f"{start.scheme}://{start.host_name}"
    pattern = origin + "/"

    if scope:
        parsed_scope = parser(scope)
        if parsed_scope.scheme and parsed_scope.host_name:
            pattern = scope
        else:
            pattern = origin + (scope if scope.startswith("/") else "/" + scope)

    return strip_wildcard_suffix(pattern)


def build_access_rules(
    rules: Sequence[AccessRule],
    start_url: str,
    scope: str = "",
    default_rules: Sequence[AccessRule] = DEFAULT_ACCESS_RULES,
    parser: DomainParser = parse_domain,
) -> list[AccessRule]:
    """Merge the declared rules with the base scope rule.

    Declared rules matching the base pattern (case-insensitively) are folded
    into the base rule, whose access level becomes theirs. Declared rules
    identical to a default rule are emitted once; other declared rules are
    emitted as given, in order. The base rule is appended last.

    Args:
        rules: Whitelist entries from the canonical manifest
        start_url: Start URL of the app
        scope: Navigation scope (path or absolute URL), may be empty
        default_rules: Rules emitted ahead of the declared ones
        parser: Domain parser used for the start URL and scope

    Returns:
        The final ordered rule list
    """
    base_pattern = compute_base_pattern(start_url, scope, parser)
    base_access = DEFAULT_API_ACCESS

    def prepare(rule: AccessRule) -> AccessRule | None:
        nonlocal base_access
        if rule.url == WILDCARD_RULE:
            return None

        url = strip_wildcard_suffix(rule.url)
        api_access = rule.api_access or DEFAULT_API_ACCESS

        if url.casefold() == base_pattern.casefold():
            base_access = api_access
            return None

        return AccessRule(url, api_access)

    result = dedupe_rules(rule for rule in map(prepare, default_rules) if rule is not None)
    defaults = set(result)
    for rule in rules:
        prepared = prepare(rule)
        if prepared is not None and prepared not in defaults:
            result.append(prepared)

    for rule in result:
        logger.info("Access Rule added: [%s] - %s", rule.api_access, rule.url)

    result.append(AccessRule(base_pattern, base_access))
    logger.info("Access Rule added: [%s] - %s", base_access, base_pattern)

    return result
