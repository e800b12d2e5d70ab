"""
Parsing of RFC 5988 ``Link`` headers returned by the Okta API.

Okta paginates list endpoints with headers such as::

    Link: <https://example.okta.com/api/v1/users?limit=200>; rel="self"
    Link: <https://example.okta.com/api/v1/users?after=00u1&limit=200>; rel="next"

Only the ``next`` relation drives pagination. Parsing never raises: a
malformed entry is skipped and a missing ``next`` relation means the
current page is the last one.
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import parse_qs, urlsplit

import structlog

logger = structlog.get_logger(__name__)

LINK_HEADER = "link"
NEXT_REL = "next"

_ENTRY_PATTERN = re.compile(r"^\s*<([^>]*)>\s*(.*)$", re.DOTALL)


def find_link_values(headers: Mapping[str, Any] | None) -> list[str]:
    """Collect every ``Link`` header value, matching the name case-insensitively."""
    if not headers:
        return []

    values: list[str] = []
    for name, header_values in headers.items():
        if not isinstance(name, str) or name.lower() != LINK_HEADER:
            continue
        if header_values is None:
            continue
        if isinstance(header_values, str):
            values.append(header_values)
        else:
            values.extend(v for v in header_values if isinstance(v, str))
    return values


def _split_entries(value: str) -> list[str]:
    """Split a header value on commas outside ``<...>`` and quoted strings."""
    entries: list[str] = []
    current: list[str] = []
    in_url = False
    in_quotes = False

    for char in value:
        if char == '"' and not in_url:
            in_quotes = not in_quotes
        elif in_quotes:
            pass
        elif char == "<":
            in_url = True
        elif char == ">":
            in_url = False
        elif char == "," and not in_url:
            entries.append("".join(current))
            current = []
            continue
        current.append(char)

    entries.append("".join(current))
    return [entry for entry in entries if entry.strip()]


def _parse_entry(entry: str) -> tuple[str, list[str]] | None:
    """Return ``(url, rel_names)`` for one link entry, or None if malformed."""
    match = _ENTRY_PATTERN.match(entry)
    if not match:
        return None

    url, raw_params = match.groups()
    url = url.strip()
    if not url:
        return None

    for param in raw_params.split(";"):
        name, sep, value = param.partition("=")
        if not sep or name.strip().lower() != "rel":
            continue
        rels = value.strip().strip('"').split()
        if rels:
            return url, rels

    return None


def parse_link_header(values: Iterable[str] | str | None) -> dict[str, str]:
    """
    Parse one or more ``Link`` header values into a ``rel -> url`` mapping.

    Args:
        values: A single header value or every value of a repeated header

    Returns:
        Mapping of relation name to URL. The first URL seen for a relation
        wins; malformed entries are ignored.
    """
    if values is None:
        return {}
    if isinstance(values, str):
        values = [values]

    links: dict[str, str] = {}
    for value in values:
        for entry in _split_entries(value):
            parsed = _parse_entry(entry)
            if parsed is None:
                logger.debug("Skipping malformed link entry", entry=entry)
                continue
            url, rels = parsed
            for rel in rels:
                links.setdefault(rel, url)
    return links


def parse_next_link(headers: Mapping[str, Any] | None) -> str | None:
    """
    Find the continuation URL for the ``next`` relation.

    Args:
        headers: Response headers (name -> list of values), may be None

    Returns:
        The ``next`` URL, or None when this is the last page
    """
    for value in find_link_values(headers):
        for entry in _split_entries(value):
            parsed = _parse_entry(entry)
            if parsed is not None and NEXT_REL in parsed[1]:
                return parsed[0]
    return None


def extract_after_cursor(url: str | None) -> str | None:
    """
    Extract the ``after`` cursor from a next-page URL.

    e.g. ``https://example.okta.com/api/v1/users?after=00u1&limit=200``
    yields ``00u1``.
    """
    if not url:
        return None

    query = urlsplit(url).query
    if not query:
        return None

    after = parse_qs(query).get("after")
    if not after:
        return None
    return after[0]
