# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API middleware."""

from eden_academy.api.middleware.request_context import (
    REQUEST_ID_HEADER,
    RequestContextMiddleware,
)

__all__ = ["REQUEST_ID_HEADER", "RequestContextMiddleware"]
