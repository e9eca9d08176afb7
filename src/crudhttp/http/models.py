# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across crudhttp."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar

import httpx

from ..config import HttpSettings
from .headers import HeaderPairs, header_pairs, header_value, normalize_headers

T = TypeVar("T")

Headers = Mapping[str, str]


class HttpMethod(str, Enum):
    GET = "GET"
    HEAD = "HEAD"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"
    PATCH = "PATCH"
    OPTIONS = "OPTIONS"

    @classmethod
    def coerce(cls, value: HttpMethod | str | None) -> HttpMethod:
        """Accept enum members or method names in any case."""
        if isinstance(value, cls):
            return value
        if isinstance(value, Enum):
            value = value.value
        name = str(value or "").strip().upper()
        if not name:
            raise ValueError("HTTP method must be set")
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"Unsupported HTTP method: {value!r}") from None


class CreateMethod(str, Enum):
    """Verbs valid for ``create``: PUT to a known URI, POST to a collection URI."""

    PUT = "PUT"
    POST = "POST"

    @classmethod
    def coerce(cls, value: CreateMethod | str) -> CreateMethod:
        """Accept ``PUT``/``POST`` in any case; other verbs raise ``ValueError``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, Enum):
            value = value.value
        name = str(value or "").strip().upper()
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"create supports PUT or POST, not {value!r}") from None


class UnsetType:
    """Marker for a response whose body was deliberately not parsed."""

    _instance: UnsetType | None = None

    def __new__(cls) -> UnsetType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET = UnsetType()


@dataclass(frozen=True)
class HttpRequest:
    """Immutable request descriptor consumed by transports."""

    url: str
    method: HttpMethod = HttpMethod.GET
    headers: HeaderPairs = ()
    body: bytes | None = None
    timeout: float | None = None
    allow_redirects: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", HttpMethod.coerce(self.method))
        object.__setattr__(self, "headers", header_pairs(self.headers))
        if isinstance(self.body, (bytearray, memoryview)):
            object.__setattr__(self, "body", bytes(self.body))

    def header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive header lookup."""
        return header_value(self.headers, name, default)

    @property
    def header_map(self) -> dict[str, str]:
        """Lowercase-keyed view of the request headers."""
        return normalize_headers(self.headers)

    @property
    def text(self) -> str | None:
        return None if self.body is None else self.body.decode("utf-8")


class RawResponse(Protocol):
    """
    What a transport must hand back.

    ``httpx.Response`` satisfies this as-is. ``json()`` may also return an awaitable
    for transports whose body decoding is itself asynchronous.
    """

    status_code: int

    @property
    def reason_phrase(self) -> str: ...

    @property
    def headers(self) -> Any: ...

    def json(self) -> Any: ...


@dataclass(frozen=True)
class HttpResponse(Generic[T]):
    """
    Response envelope: raw transport response plus the materialized body.

    ``parsed_body`` is ``UNSET`` when the materialization policy decided not to read
    the body. A decoded JSON ``null`` is ``None`` and still counts as parsed.
    """

    raw: Any
    status_code: int
    status_text: str = ""
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    url: str | None = None
    parsed_body: T | UnsetType = UNSET

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def has_parsed_body(self) -> bool:
        return self.parsed_body is not UNSET

    @property
    def content(self) -> bytes:
        """Raw body bytes as the transport read them (empty when unavailable)."""
        content = getattr(self.raw, "content", b"")
        if isinstance(content, str):
            return content.encode("utf-8")
        return bytes(content or b"")

    def header(self, name: str, default: str | None = None) -> str | None:
        return self.headers.get(name, default)


@dataclass
class RetryConfig:
    """Retry policy for RetryingTransport derived from HttpSettings."""

    max_attempts: int = 2
    backoff_factor: float = 2.0
    initial_delay: float = 1.0

    @classmethod
    def from_settings(cls, settings: HttpSettings) -> RetryConfig:
        """Build a retry config from the shared HttpSettings."""
        return cls(
            max_attempts=max(1, settings.max_retries),
            backoff_factor=settings.backoff_factor,
            initial_delay=settings.initial_delay,
        )


__all__ = [
    "CreateMethod",
    "Headers",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "RawResponse",
    "RetryConfig",
    "UNSET",
    "UnsetType",
]
