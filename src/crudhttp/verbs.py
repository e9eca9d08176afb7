# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CRUD verb façades over an injectable transport.

Every function takes the transport first; ``None`` means a per-call default
``HttpxTransport``. Non-2xx responses raise ``HttpError`` and malformed JSON
bodies raise ``ParseError``; transport exceptions propagate unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .http.builder import NO_BODY, build_request
from .http.materialize import decode_json, materialize
from .http.models import CreateMethod, HttpMethod, HttpRequest, HttpResponse
from .http.transport import Transport, send


async def http(transport: Transport | None, request: HttpRequest) -> HttpResponse[Any]:
    """Send a prebuilt request and materialize the response."""
    raw = await send(transport, request)
    return await materialize(raw, request.method)


async def http_body(transport: Transport | None, request: HttpRequest) -> Any:
    """
    Send a prebuilt request and return only the decoded JSON body.

    No status or header checks are applied, so callers get whatever the server sent.
    """
    raw = await send(transport, request)
    return await decode_json(raw)


async def read(
    transport: Transport | None,
    path: str,
    headers: Mapping[str, str] | None = None,
) -> HttpResponse[Any]:
    return await http(transport, build_request(HttpMethod.GET, path, headers))


async def head(
    transport: Transport | None,
    path: str,
    headers: Mapping[str, str] | None = None,
) -> HttpResponse[Any]:
    """HEAD request; the envelope never carries a parsed body."""
    return await http(transport, build_request(HttpMethod.HEAD, path, headers))


async def create(
    transport: Transport | None,
    method: CreateMethod,
    path: str,
    headers: Mapping[str, str] | None = None,
    body: Any = None,
) -> HttpResponse[Any]:
    """PUT to a known URI or POST to a collection URI, with a JSON-serialized body."""
    create_method = CreateMethod.coerce(method)
    return await http(transport, build_request(create_method, path, headers, _entity(body)))


async def update(
    transport: Transport | None,
    path: str,
    headers: Mapping[str, str] | None = None,
    body: Any = None,
) -> HttpResponse[Any]:
    return await http(transport, build_request(HttpMethod.PUT, path, headers, _entity(body)))


async def delete(
    transport: Transport | None,
    path: str,
    headers: Mapping[str, str] | None = None,
    body: Any = None,
) -> HttpResponse[Any]:
    """DELETE with no default headers; the body defaults to an empty JSON object."""
    return await http(
        transport,
        build_request(HttpMethod.DELETE, path, {} if headers is None else headers, {} if body is None else body),
    )


def _entity(body: Any) -> Any:
    return NO_BODY if body is None else body


__all__ = ["create", "delete", "head", "http", "http_body", "read", "update"]
