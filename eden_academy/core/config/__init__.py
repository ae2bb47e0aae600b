# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for Eden Academy.

Settings are Pydantic-based and loaded from environment variables
(or a local .env file).

Example:
    >>> from eden_academy.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from eden_academy.core.config.settings import (
    APISettings,
    CORSSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "StorageSettings",
    "CORSSettings",
    "APISettings",
]
