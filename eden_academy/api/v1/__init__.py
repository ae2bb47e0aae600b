# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all v1 API endpoint definitions.
Each module provides a FastAPI router for a specific domain.

Modules:
    curation: Curation sessions, decisions and curator analytics.
"""

from fastapi import APIRouter

from eden_academy.api.v1 import curation

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

# Include domain routers
router.include_router(curation.router, prefix="/curation", tags=["Curation"])

__all__ = ["router"]
