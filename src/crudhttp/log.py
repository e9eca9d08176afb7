# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging setup for applications that want to see crudhttp's debug records."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "CRUDHTTP_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def resolve_log_level(level: str | None = None) -> int:
    """Map an explicit level name, or ``CRUDHTTP_LOG_LEVEL`` read now, to a logging level."""
    name = (level or os.getenv(LOG_LEVEL_ENV) or "WARNING").strip().upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.WARNING


def setup_logging(level: str | None = None) -> None:
    """
    Route library records through ``logging.basicConfig``.

    crudhttp itself only emits DEBUG records (dispatch and body-parsing decisions);
    failures are raised to the caller, never logged.
    """
    logging.basicConfig(level=resolve_log_level(level), format=LOG_FORMAT)


__all__ = ["resolve_log_level", "setup_logging"]
