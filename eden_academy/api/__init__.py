# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""HTTP API package for the Eden Academy curation service."""

from eden_academy.api.app import create_app

__all__ = ["create_app"]
