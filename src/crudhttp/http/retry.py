# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Retry decorator for transports."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from ..config import load_http_settings
from ..errors import ErrorCategory, categorize_exception, error_category_to_reason
from .models import HttpRequest, RetryConfig
from .transport import Transport, resolve

logger = logging.getLogger(__name__)


RETRYABLE_CATEGORIES = frozenset(
    {ErrorCategory.TIMEOUT, ErrorCategory.CONNECTION_ERROR, ErrorCategory.DNS_ERROR}
)


def build_default_retry_config() -> RetryConfig:
    """Create a RetryConfig from environment-backed HttpSettings."""
    return RetryConfig.from_settings(load_http_settings())


class RetryingTransport:
    """
    Wrap a transport with exponential backoff for transport-level failures.

    Only exceptions raised by the wrapped transport are retried. Any response that
    comes back, 5xx included, is returned as-is for the materializer to judge.
    Without ``retry_on``, an exception is retried when ``categorize_exception`` puts
    it in ``RETRYABLE_CATEGORIES`` (timeouts, connection and DNS failures).
    """

    def __init__(
        self,
        transport: Transport,
        retry_config: RetryConfig | None = None,
        *,
        retry_on: tuple[type[BaseException], ...] | None = None,
    ):
        self._transport = transport
        self.retry_config = retry_config or build_default_retry_config()
        self.retry_on = retry_on

    def is_retryable(self, exc: Exception) -> bool:
        if self.retry_on is not None:
            return isinstance(exc, self.retry_on)
        return categorize_exception(exc) in RETRYABLE_CATEGORIES

    async def __call__(self, request: HttpRequest) -> Any:
        cfg = self.retry_config
        attempts = max(1, cfg.max_attempts)
        delay = cfg.initial_delay

        for attempt in range(1, attempts + 1):
            try:
                return await resolve(self._transport(request))
            except Exception as exc:
                if attempt >= attempts or not self.is_retryable(exc):
                    raise
                logger.debug(
                    "%s %s failed (%s: %s); retry %d/%d in %.2fs",
                    request.method.value,
                    request.url,
                    type(exc).__name__,
                    error_category_to_reason(categorize_exception(exc)),
                    attempt,
                    attempts - 1,
                    delay,
                )
            await asyncio.sleep(delay)
            delay *= cfg.backoff_factor

        raise AssertionError("unreachable")  # pragma: no cover

    async def aclose(self) -> None:
        close = getattr(self._transport, "aclose", None)
        if close is not None:
            await resolve(close())


__all__ = ["RETRYABLE_CATEGORIES", "RetryingTransport", "build_default_retry_config"]
