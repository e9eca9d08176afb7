# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
crudhttp package entrypoint.

Async CRUD helpers (read/create/update/delete/head plus raw requests) over an
injectable transport. Response bodies are parsed as JSON only when the method,
status and Content-Type say there is an entity to parse; every façade also comes
in a curried form for composition.
"""

from .config import HttpSettings, load_http_settings
from .curried import (
    curried_create,
    curried_delete,
    curried_head,
    curried_http,
    curried_read,
    curried_update,
)
from .errors import (
    CrudHttpError,
    ErrorCategory,
    HttpError,
    ParseError,
    categorize_exception,
    error_category_to_reason,
)
from .http import (
    UNSET,
    CreateMethod,
    HttpMethod,
    HttpRequest,
    HttpResponse,
    HttpxTransport,
    RetryConfig,
    RetryingTransport,
    StubTransport,
    Transport,
    build_request,
    create_default_transport,
    materialize,
)
from .log import setup_logging
from .verbs import create, delete, head, http, http_body, read, update
from .version import __version__

__all__ = [
    "CreateMethod",
    "CrudHttpError",
    "ErrorCategory",
    "HttpError",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxTransport",
    "ParseError",
    "RetryConfig",
    "RetryingTransport",
    "StubTransport",
    "Transport",
    "UNSET",
    "build_request",
    "categorize_exception",
    "create",
    "create_default_transport",
    "curried_create",
    "curried_delete",
    "curried_head",
    "curried_http",
    "curried_read",
    "curried_update",
    "delete",
    "error_category_to_reason",
    "head",
    "http",
    "http_body",
    "load_http_settings",
    "materialize",
    "read",
    "setup_logging",
    "update",
    "__version__",
]
