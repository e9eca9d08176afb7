# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for crudhttp."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"crudhttp/{__version__}"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """Defaults for the httpx-backed transport and the retry decorator."""

    timeout: float = 10.0
    max_retries: int = 2
    backoff_factor: float = 2.0
    initial_delay: float = 1.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    base_url: str = ""

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            timeout=_float_env("CRUDHTTP_HTTP_TIMEOUT", cls.timeout),
            max_retries=_int_env("CRUDHTTP_HTTP_RETRIES", cls.max_retries),
            backoff_factor=_float_env("CRUDHTTP_HTTP_BACKOFF", cls.backoff_factor),
            initial_delay=_float_env("CRUDHTTP_HTTP_INITIAL_DELAY", cls.initial_delay),
            user_agent=os.getenv("CRUDHTTP_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("CRUDHTTP_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("CRUDHTTP_HTTP_VERIFY_SSL", cls.verify_ssl),
            base_url=os.getenv("CRUDHTTP_BASE_URL", cls.base_url),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()
