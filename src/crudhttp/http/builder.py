# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request descriptor construction for the verb façades."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from .models import CreateMethod, HttpMethod, HttpRequest

JSON_CONTENT_TYPE = "application/json"

# Sentinel for "no entity"; ``None`` is a legitimate JSON body (``null``).
NO_BODY: Any = object()

_JSON_DEFAULT_METHODS = frozenset(
    {HttpMethod.GET, HttpMethod.HEAD, HttpMethod.PUT, HttpMethod.POST, HttpMethod.PATCH}
)


def default_headers(method: HttpMethod | CreateMethod | str) -> dict[str, str]:
    """Headers applied when a façade caller passes ``headers=None``."""
    if HttpMethod.coerce(method) in _JSON_DEFAULT_METHODS:
        return {"Content-Type": JSON_CONTENT_TYPE}
    return {}


def serialize_body(body: Any) -> bytes:
    """
    Serialize a body to compact JSON, independent of the declared Content-Type.

    ``bytes`` pass through untouched so callers can send pre-encoded payloads. Every
    other value, ``str`` included, is JSON-encoded.
    """
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def build_request(
    method: HttpMethod | CreateMethod | str,
    url: str,
    headers: Mapping[str, str] | None = None,
    body: Any = NO_BODY,
    *,
    timeout: float | None = None,
    allow_redirects: bool = True,
) -> HttpRequest:
    """Build an immutable request descriptor; raises ``ValueError`` if no method is set."""
    http_method = HttpMethod.coerce(method)
    if headers is None:
        headers = default_headers(http_method)
    return HttpRequest(
        url=str(url),
        method=http_method,
        headers=headers,
        body=None if body is NO_BODY else serialize_body(body),
        timeout=timeout,
        allow_redirects=allow_redirects,
    )


__all__ = ["JSON_CONTENT_TYPE", "NO_BODY", "build_request", "default_headers", "serialize_body"]
