# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for Eden Academy.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Timezone-aware datetime operations
"""

from eden_academy.utils.datetime import (
    EPOCH,
    ensure_utc,
    assume_utc,
    utc_now,
)
from eden_academy.utils.logging import bind_context, clear_context, get_logger, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    # Datetime
    "EPOCH",
    "utc_now",
    "ensure_utc",
    "assume_utc",
]
