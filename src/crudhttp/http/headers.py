# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization utilities.

HTTP header field names are case-insensitive (RFC 9110). Requests carry headers as an
ordered tuple of pairs and transports hand back whatever container they like, so every
lookup in the library goes through these helpers.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

HeaderPairs = tuple[tuple[str, str], ...]


def header_pairs(headers: Any) -> HeaderPairs:
    """
    Flatten a header container into an ordered tuple of ``(name, value)`` pairs.

    Accepts plain dicts, ``httpx.Headers`` (duplicates preserved via ``multi_items``)
    and iterables of pairs. Original name casing and insertion order are kept.
    """
    if not headers:
        return ()

    multi_items = getattr(headers, "multi_items", None)
    if callable(multi_items):
        items: Iterable[Any] = multi_items()
    elif callable(getattr(headers, "items", None)):
        items = headers.items()
    else:
        items = headers

    pairs: list[tuple[str, str]] = []
    for key, value in items:
        if key is None:
            continue
        name = str(key).strip()
        if not name:
            continue
        pairs.append((name, "" if value is None else str(value)))
    return tuple(pairs)


def normalize_headers(headers: Any) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header container (last value wins)."""
    return {name.lower(): value for name, value in header_pairs(headers)}


def header_value(headers: Any, name: str, default: str | None = None) -> str | None:
    """
    Return a header value using case-insensitive key matching.

    Returns ``default`` when the header is absent, which lets callers tell a missing
    header apart from one sent with an empty value.
    """
    if not headers or not name:
        return default

    lower = name.lower()
    for key, value in header_pairs(headers):
        if key.lower() == lower:
            return str(value).strip()
    return default


__all__ = ["HeaderPairs", "header_pairs", "header_value", "normalize_headers"]
