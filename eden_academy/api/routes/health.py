# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Health check endpoints.

This module provides health and readiness endpoints for the API.
"""

import logging
import time
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from eden_academy import __version__
from eden_academy.api.dependencies import get_store
from eden_academy.core.config import get_settings
from eden_academy.domains.curation.exceptions import StoreUnavailableError
from eden_academy.infrastructure.storage.base import CurationStore
from eden_academy.utils.datetime import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()

# Track server start time for uptime calculation
_server_start_time = time.time()


class ComponentHealth(BaseModel):
    """Individual component health status."""
    status: str = Field(description="Component status")
    backend: str | None = Field(None, description="Backend implementation")
    latency_ms: float | None = Field(None, description="Response latency in ms")
    message: str | None = Field(None, description="Additional status message")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(description="Current server timestamp")
    version: str = Field(description="API version")
    environment: str = Field(description="Deployment environment")
    uptime_seconds: int = Field(description="Server uptime in seconds")
    storage: ComponentHealth = Field(description="Curation store health")


class ReadinessResponse(BaseModel):
    """Readiness check response model."""
    ready: bool = Field(description="Whether the service is ready")
    checks: dict[str, Any] = Field(description="Individual check results")


async def check_store(store: CurationStore) -> ComponentHealth:
    """Check that the curation store can be read."""
    start = time.time()
    try:
        await store.check_health()
    except StoreUnavailableError as e:
        logger.error("Curation store health check failed: %s", e)
        return ComponentHealth(
            status="unhealthy",
            backend=store.backend_name,
            message=str(e),
        )

    latency = (time.time() - start) * 1000
    return ComponentHealth(
        status="healthy",
        backend=store.backend_name,
        latency_ms=round(latency, 2),
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(store: CurationStore = Depends(get_store)) -> HealthResponse:
    """Check if the API is healthy with store details.

    Returns:
        HealthResponse with detailed status.
    """
    settings = get_settings()
    storage_health = await check_store(store)

    return HealthResponse(
        status=storage_health.status,
        timestamp=utc_now(),
        version=__version__,
        environment=settings.environment,
        uptime_seconds=int(time.time() - _server_start_time),
        storage=storage_health,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(store: CurationStore = Depends(get_store)) -> ReadinessResponse:
    """Check if the API is ready to accept traffic.

    Returns:
        ReadinessResponse with individual check results.
    """
    storage_health = await check_store(store)
    return ReadinessResponse(
        ready=storage_health.status == "healthy",
        checks={
            "storage": {
                "status": storage_health.status,
                "latency_ms": storage_health.latency_ms,
            },
        },
    )


@router.get("/health/live")
async def liveness_check() -> dict[str, str]:
    """Check that the process is up."""
    return {"status": "alive"}
