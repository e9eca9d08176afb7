# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Curried forms of the verb façades.

Each stage takes one argument and returns the next stage. Partial application only
builds closures; the transport is not touched until the final stage's coroutine is
awaited. ``curried_read(t)("/home")`` can be handed around and called later with
headers, or with nothing to use the defaults.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from . import verbs
from .http.models import CreateMethod, HttpRequest, HttpResponse
from .http.transport import Transport

Response = Awaitable[HttpResponse[Any]]
HeadersArg = Mapping[str, str] | None


def curried_http(transport: Transport | None = None) -> Callable[[HttpRequest], Response]:
    def with_request(request: HttpRequest) -> Response:
        return verbs.http(transport, request)

    return with_request


def curried_read(transport: Transport | None = None) -> Callable[[str], Callable[..., Response]]:
    def with_path(path: str) -> Callable[..., Response]:
        def with_headers(headers: HeadersArg = None) -> Response:
            return verbs.read(transport, path, headers)

        return with_headers

    return with_path


def curried_head(transport: Transport | None = None) -> Callable[[str], Callable[..., Response]]:
    def with_path(path: str) -> Callable[..., Response]:
        def with_headers(headers: HeadersArg = None) -> Response:
            return verbs.head(transport, path, headers)

        return with_headers

    return with_path


def curried_create(
    transport: Transport | None = None,
) -> Callable[[CreateMethod], Callable[[str], Callable[..., Callable[[Any], Response]]]]:
    def with_method(method: CreateMethod) -> Callable[[str], Callable[..., Callable[[Any], Response]]]:
        def with_path(path: str) -> Callable[..., Callable[[Any], Response]]:
            def with_headers(headers: HeadersArg = None) -> Callable[[Any], Response]:
                def with_body(body: Any) -> Response:
                    return verbs.create(transport, method, path, headers, body)

                return with_body

            return with_headers

        return with_path

    return with_method


def curried_update(transport: Transport | None = None) -> Callable[[str], Callable[..., Callable[[Any], Response]]]:
    def with_path(path: str) -> Callable[..., Callable[[Any], Response]]:
        def with_headers(headers: HeadersArg = None) -> Callable[[Any], Response]:
            def with_body(body: Any) -> Response:
                return verbs.update(transport, path, headers, body)

            return with_body

        return with_headers

    return with_path


def curried_delete(transport: Transport | None = None) -> Callable[[str], Callable[..., Response]]:
    """``curried_delete(t)(path)(headers=None, body=None)``; the last stage takes both."""

    def with_path(path: str) -> Callable[..., Response]:
        def with_args(headers: HeadersArg = None, body: Any = None) -> Response:
            return verbs.delete(transport, path, headers, body)

        return with_args

    return with_path


__all__ = [
    "curried_create",
    "curried_delete",
    "curried_head",
    "curried_http",
    "curried_read",
    "curried_update",
]
