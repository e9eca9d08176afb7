# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Test doubles that satisfy the Transport contract."""

from __future__ import annotations

from typing import Any

import httpx

from .models import HttpMethod, HttpRequest


class StubTransport:
    """
    Deterministic, programmable transport for tests.

    Responses are registered per ``(method, url)``; a registration without a method
    matches any method. Calls are synchronous, which the façades accept just like an
    async transport. Every request is recorded in ``requests``.
    """

    def __init__(self, responses: dict[Any, httpx.Response] | None = None):
        self._responses: dict[tuple[HttpMethod | None, str], httpx.Response] = {}
        self.requests: list[HttpRequest] = []
        for key, response in (responses or {}).items():
            if isinstance(key, tuple):
                self.add(key[1], response, method=key[0])
            else:
                self.add(key, response)

    def add(self, url: str, response: httpx.Response, *, method: HttpMethod | str | None = None) -> None:
        key_method = None if method is None else HttpMethod.coerce(method)
        self._responses[(key_method, url)] = response

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> HttpRequest | None:
        return self.requests[-1] if self.requests else None

    def __call__(self, request: HttpRequest) -> httpx.Response:
        self.requests.append(request)
        for key in ((request.method, request.url), (None, request.url)):
            if key in self._responses:
                return self._responses[key]
        raise httpx.ConnectError(f"No stubbed response for {request.method.value} {request.url}")

    def aclose(self) -> None:
        return None


__all__ = ["StubTransport"]
