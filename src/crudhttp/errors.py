# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class CrudHttpError(Exception):
    """Base class for errors raised by crudhttp itself."""


class HttpError(CrudHttpError):
    """Non-2xx response. The message is the response status text."""

    def __init__(self, status_text: str, *, status_code: int | None = None, url: str | None = None):
        super().__init__(status_text)
        self.status_text = status_text
        self.status_code = status_code
        self.url = url


class ParseError(CrudHttpError, ValueError):
    """Success response announced a body that is not valid JSON."""

    def __init__(self, message: str, *, status_code: int | None = None, url: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    PARSE_ERROR = "PARSE_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


def categorize_exception(exc: BaseException | None) -> ErrorCategory:
    """
    Map library, httpx and socket exceptions to ErrorCategory.

    Transport errors propagate out of the façades untouched; callers that want a
    coarse label for reporting can pass them through here.
    """
    if exc is None:
        return ErrorCategory.NONE

    if isinstance(exc, HttpError):
        return ErrorCategory.HTTP_ERROR

    if isinstance(exc, ParseError):
        return ErrorCategory.PARSE_ERROR

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, TimeoutError):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.HTTP_ERROR: "Server returned an error status",
        ErrorCategory.PARSE_ERROR: "Response body is not valid JSON",
        ErrorCategory.UNKNOWN_ERROR: "Request failed",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Request failed")


__all__ = [
    "CrudHttpError",
    "ErrorCategory",
    "HttpError",
    "ParseError",
    "categorize_exception",
    "error_category_to_reason",
]
