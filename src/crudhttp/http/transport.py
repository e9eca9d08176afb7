# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport abstraction and the default httpx-backed transport."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Union

import httpx

from ..config import HttpSettings, load_http_settings
from .models import HttpRequest, RawResponse

logger = logging.getLogger(__name__)

Transport = Callable[[HttpRequest], Union[Awaitable[RawResponse], RawResponse]]


class HttpxTransport:
    """
    Asynchronous transport over ``httpx.AsyncClient``.

    Connection handling, TLS, redirects and timeouts are all httpx's business. The
    instance owns its client unless one is injected; close it with ``aclose()`` or
    use it as an async context manager.
    """

    def __init__(self, settings: HttpSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or load_http_settings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.settings.base_url,
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    async def __call__(self, request: HttpRequest) -> httpx.Response:
        headers = list(request.headers)
        if request.header("User-Agent") is None:
            headers.append(("User-Agent", self.settings.user_agent))
        timeout = request.timeout if request.timeout is not None else self.settings.timeout

        logger.debug("%s %s", request.method.value, request.url)
        response = await self._client.request(
            request.method.value,
            request.url,
            headers=headers,
            content=request.body,
            timeout=timeout,
            follow_redirects=request.allow_redirects,
        )
        logger.debug("%s %s -> %s", request.method.value, request.url, response.status_code)
        return response

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()


def create_default_transport(settings: HttpSettings | None = None) -> HttpxTransport:
    """Factory for the default httpx-backed transport."""
    return HttpxTransport(settings or load_http_settings())


async def resolve(value: Any) -> Any:
    """Await ``value`` if it is awaitable; sync fakes and async transports look the same."""
    if inspect.isawaitable(value):
        return await value
    return value


async def send(transport: Transport | None, request: HttpRequest) -> Any:
    """
    Hand ``request`` to ``transport`` and return its raw response.

    With no transport a fresh default one is created for this call and closed
    afterwards; the response body has already been read by then.
    """
    if transport is not None:
        return await resolve(transport(request))
    async with create_default_transport() as default:
        return await default(request)


__all__ = ["HttpxTransport", "Transport", "create_default_transport", "resolve", "send"]
