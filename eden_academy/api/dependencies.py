# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Get the curation store opened at startup
- Get service instances bound to that store

Example:
    @router.get("/analytics")
    async def get_analytics(
        engine: CuratorAnalyticsEngine = Depends(get_analytics_engine),
    ):
        ...
"""

import logging

from fastapi import Depends, HTTPException, Request, status

from eden_academy.domains.curation.analytics import CuratorAnalyticsEngine
from eden_academy.domains.curation.sessions import CurationSessionService
from eden_academy.infrastructure.storage.base import CurationStore

logger = logging.getLogger(__name__)


def get_store(request: Request) -> CurationStore:
    """Get the curation store opened by the application lifespan.

    Args:
        request: The incoming request.

    Returns:
        The application's curation store.

    Raises:
        HTTPException: If the store has not been initialized.
    """
    store = getattr(request.app.state, "store", None)
    if store is None:
        logger.error("Curation store requested before initialization")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Curation store not initialized",
        )
    return store


def get_analytics_engine(
    store: CurationStore = Depends(get_store),
) -> CuratorAnalyticsEngine:
    """Get a curator analytics engine bound to the store."""
    return CuratorAnalyticsEngine(store)


def get_session_service(
    store: CurationStore = Depends(get_store),
) -> CurationSessionService:
    """Get a curation session service bound to the store."""
    return CurationSessionService(store)
