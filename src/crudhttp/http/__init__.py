# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP building blocks: descriptors, transports and response materialization."""

from .adapters import StubTransport
from .builder import JSON_CONTENT_TYPE, NO_BODY, build_request, default_headers, serialize_body
from .headers import header_pairs, header_value, normalize_headers
from .materialize import materialize
from .models import (
    UNSET,
    CreateMethod,
    Headers,
    HttpMethod,
    HttpRequest,
    HttpResponse,
    RawResponse,
    RetryConfig,
    UnsetType,
)
from .retry import RetryingTransport, build_default_retry_config
from .transport import HttpxTransport, Transport, create_default_transport, send

__all__ = [
    "CreateMethod",
    "Headers",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "HttpxTransport",
    "JSON_CONTENT_TYPE",
    "NO_BODY",
    "RawResponse",
    "RetryConfig",
    "RetryingTransport",
    "StubTransport",
    "Transport",
    "UNSET",
    "UnsetType",
    "build_default_retry_config",
    "build_request",
    "create_default_transport",
    "default_headers",
    "header_pairs",
    "header_value",
    "materialize",
    "normalize_headers",
    "send",
    "serialize_body",
]
