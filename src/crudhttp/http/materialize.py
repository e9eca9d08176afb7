# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Response materialization: decide whether a response body gets parsed.

Plenty of success responses carry no entity: every HEAD, every 204, and a 200/201
without a Content-Type (common for POST/PUT). Reading JSON from those either fails on
an empty body or misbehaves in the transport, so the body is only decoded when the
method is not HEAD, the status is not 204 and a Content-Type header was sent.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..errors import HttpError, ParseError
from .headers import header_pairs, header_value
from .models import UNSET, CreateMethod, HttpMethod, HttpResponse
from .transport import resolve

logger = logging.getLogger(__name__)


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def status_text(raw: Any) -> str:
    """Status text reported by the transport, falling back to the standard phrase."""
    text = getattr(raw, "reason_phrase", None) or getattr(raw, "status_text", None)
    if text:
        return str(text)
    return httpx.codes.get_reason_phrase(int(raw.status_code))


def _response_url(raw: Any) -> str | None:
    try:
        url = getattr(raw, "url", None)
    except RuntimeError:
        # httpx.Response.url raises when no request is attached
        return None
    return None if url is None else str(url)


def should_parse_body(method: HttpMethod, status_code: int, content_type: str | None) -> bool:
    if method is HttpMethod.HEAD:
        return False
    if status_code == 204:
        return False
    return bool(content_type)


async def decode_json(raw: Any) -> Any:
    """Run the transport's JSON decoder, turning decode failures into ``ParseError``."""
    try:
        return await resolve(raw.json())
    except ValueError as exc:
        raise ParseError(
            f"Invalid JSON response body: {exc}",
            status_code=getattr(raw, "status_code", None),
            url=_response_url(raw),
        ) from exc


async def materialize(raw: Any, method: HttpMethod | CreateMethod | str) -> HttpResponse[Any]:
    """
    Turn a raw transport response into an ``HttpResponse`` envelope.

    Raises ``HttpError`` (message = status text) for any non-2xx status without
    touching the body, and ``ParseError`` when a body that qualifies for parsing is
    not valid JSON.
    """
    http_method = HttpMethod.coerce(method)
    status_code = int(raw.status_code)
    url = _response_url(raw)

    if not is_success(status_code):
        raise HttpError(status_text(raw), status_code=status_code, url=url)

    content_type = header_value(raw.headers, "content-type")
    parsed_body: Any = UNSET
    if should_parse_body(http_method, status_code, content_type):
        parsed_body = await decode_json(raw)
        logger.debug("%s %s: parsed %s body", http_method.value, url or "", content_type)
    else:
        logger.debug("%s %s: body left unparsed (status=%s)", http_method.value, url or "", status_code)

    return HttpResponse(
        raw=raw,
        status_code=status_code,
        status_text=status_text(raw),
        headers=httpx.Headers(list(header_pairs(raw.headers))),
        url=url,
        parsed_body=parsed_body,
    )


__all__ = ["decode_json", "is_success", "materialize", "should_parse_body", "status_text"]
