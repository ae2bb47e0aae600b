# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Curation API endpoints.

This module provides endpoints for the curation workflow:
- GET /analytics - Curator analytics report
- GET /sessions - List curation sessions
- POST /sessions - Create a curation session
- GET /sessions/{session_id}/decisions - Session decisions with work details
- POST /sessions/{session_id}/decisions - Record a decision

Response bodies use camelCase keys.

Example:
    GET /api/v1/curation/analytics?curatorId=nina&period=week
"""

import logging
from datetime import datetime
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from eden_academy.api.dependencies import get_analytics_engine, get_session_service
from eden_academy.domains.curation.analytics import CuratorAnalyticsEngine
from eden_academy.domains.curation.exceptions import (
    InvalidInputError,
    SessionNotFoundError,
    StoreUnavailableError,
)
from eden_academy.domains.curation.sessions import (
    CreateSessionRequest,
    CurationSessionService,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class CamelModel(BaseModel):
    """Model exchanged with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Analytics Response Models
# ============================================================================


class ActivityResponse(CamelModel):
    """Curator activity metrics."""

    total_reviews: int = Field(description="Decisions of any kind, skips included")
    total_decisions: int = Field(description="Decisions other than skip")
    acceptance_rate: float = Field(description="Accepted share of non-skip decisions, 0-100")
    average_review_time: float = Field(description="Mean seconds spent per decision")
    peak_hours: list[int] = Field(description="Up to three busiest hours of day")
    sessions_completed: int = Field(description="Completed sessions in the period")


class QualityResponse(CamelModel):
    """Curator quality metrics."""

    average_quality_accepted: float = Field(description="Mean quality score of accepted works")
    average_quality_rejected: float = Field(description="Mean quality score of rejected works")
    consistency_score: float = Field(description="Decision uniformity within quality bands, 0-100")
    disagreement_rate: float = Field(description="Collaboration votes overruled by outcome, 0-100")


class ThemePreferenceResponse(CamelModel):
    """Acceptance rate for one theme."""

    theme: str = Field(description="Theme name")
    acceptance_rate: float = Field(description="Acceptance rate for the theme, 0-100")


class AgentPreferenceResponse(CamelModel):
    """Acceptance rate for one agent."""

    agent_id: str = Field(description="Agent identifier")
    acceptance_rate: float = Field(description="Acceptance rate for the agent, 0-100")


class PreferencesResponse(CamelModel):
    """Curator preference analysis."""

    favored_themes: list[ThemePreferenceResponse] = Field(description="Top themes by acceptance")
    favored_styles: list[str] = Field(description="Styles of accepted works")
    favored_agents: list[AgentPreferenceResponse] = Field(description="Agents by acceptance")
    bias_indicators: dict[str, float] = Field(description="Detected decision biases")


class PerformanceResponse(CamelModel):
    """Curator performance metrics."""

    exhibition_success: float = Field(description="Exhibition success (placeholder)")
    peer_agreement: float = Field(description="Peer agreement (placeholder)")
    fatigue_indicator: float = Field(description="Largest in-session acceptance drift, 0-100")
    optimal_batch_size: int = Field(description="Mean decisions per session")
    optimal_session_length: int = Field(description="Mean session review minutes")


class InsightResponse(CamelModel):
    """Generated curator insight."""

    type: str = Field(description="Insight type")
    message: str = Field(description="Insight message")
    severity: str = Field(description="info, suggestion or warning")
    timestamp: datetime = Field(description="When the insight was generated")


class CuratorAnalyticsResponse(CamelModel):
    """Complete curator analytics report."""

    curator_id: str = Field(description="Curator ID")
    period: str = Field(description="Reporting period")
    activity: ActivityResponse
    quality: QualityResponse
    preferences: PreferencesResponse
    performance: PerformanceResponse
    insights: list[InsightResponse]
    generated_at: datetime = Field(description="Report generation time")


class DateRangeResponse(CamelModel):
    """Window the report was computed over."""

    start: datetime = Field(description="Period start")
    end: datetime = Field(description="Period end")


class AnalyticsMeta(CamelModel):
    """Analytics request metadata."""

    curator_id: str = Field(description="Curator ID")
    period: str = Field(description="Reporting period")
    date_range: DateRangeResponse
    sessions_analyzed: int = Field(description="Sessions included in the report")


class AnalyticsEnvelope(CamelModel):
    """Analytics endpoint response."""

    success: bool = True
    analytics: CuratorAnalyticsResponse
    meta: AnalyticsMeta


# ============================================================================
# Session Request/Response Models
# ============================================================================


class SessionListMeta(CamelModel):
    """Session counts for a listing."""

    total: int
    active: int
    completed: int


class SessionListEnvelope(CamelModel):
    """Session listing response."""

    success: bool = True
    sessions: list[dict[str, Any]] = Field(description="Sessions, most recently active first")
    meta: SessionListMeta


class SessionCreatedEnvelope(CamelModel):
    """Session creation response."""

    success: bool = True
    session: dict[str, Any] = Field(description="The created session")
    message: str


class RecordDecisionRequest(CamelModel):
    """Request to record a decision on a queued work."""

    work_id: str | None = Field(default=None, description="Work being judged")
    decision: str | None = Field(default=None, description="accept, reject, maybe or skip")
    curator_id: str | None = Field(default=None, description="Deciding curator")
    reason: str | None = Field(default=None, description="Free-text reason")
    time_spent: float | None = Field(default=None, ge=0, description="Milliseconds spent")


class DecisionProgressResponse(CamelModel):
    """Session progress after a decision."""

    reviewed: int
    remaining: int
    accepted: int
    rejected: int
    maybe: int
    target_progress: str | None = None


class DecisionRecordedEnvelope(CamelModel):
    """Decision recording response."""

    success: bool = True
    decision: dict[str, Any] = Field(description="The recorded decision")
    session_status: str
    progress: DecisionProgressResponse
    next_work_id: str | None = None


class SessionDecisionsEnvelope(CamelModel):
    """Session decisions response."""

    success: bool = True
    session_id: str
    decisions: list[dict[str, Any]] = Field(description="Decisions with work details")
    summary: dict[str, Any]


# ============================================================================
# Endpoints
# ============================================================================


def _store_failure(e: StoreUnavailableError) -> HTTPException:
    logger.error("Curation store failure: %s", e)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


@router.get(
    "/analytics",
    response_model=AnalyticsEnvelope,
    summary="Get curator analytics",
    description="Compute a curator's activity, quality, preference and performance report.",
)
async def get_curator_analytics(
    curator_id: Annotated[str | None, Query(alias="curatorId")] = None,
    period: Annotated[str | None, Query()] = "all",
    engine: CuratorAnalyticsEngine = Depends(get_analytics_engine),
) -> AnalyticsEnvelope:
    """Get the analytics report of a curator.

    Args:
        curator_id: Curator to analyze.
        period: day, week, month, year or all.
        engine: Curator analytics engine.

    Returns:
        AnalyticsEnvelope with the report and its window.

    Raises:
        HTTPException: 400 for a missing curator or unknown period,
            500 if the store fails.
    """
    try:
        result = await engine.compute_analytics(curator_id, period)
    except InvalidInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        ) from e
    except StoreUnavailableError as e:
        raise _store_failure(e) from e

    report = result.report
    return AnalyticsEnvelope(
        analytics=CuratorAnalyticsResponse.model_validate(report.to_dict()),
        meta=AnalyticsMeta(
            curator_id=report.curator_id,
            period=report.period.value,
            date_range=DateRangeResponse(start=result.period_start, end=result.period_end),
            sessions_analyzed=result.sessions_analyzed,
        ),
    )


@router.get(
    "/sessions",
    response_model=SessionListEnvelope,
    summary="List curation sessions",
)
async def list_sessions(
    curator_id: Annotated[str | None, Query(alias="curatorId")] = None,
    session_status: Annotated[str | None, Query(alias="status")] = None,
    agent_id: Annotated[str | None, Query(alias="agentId")] = None,
    service: CurationSessionService = Depends(get_session_service),
) -> SessionListEnvelope:
    """List sessions filtered by curator, status and agent.

    Raises:
        HTTPException: 500 if the store fails.
    """
    try:
        listing = await service.list_sessions(curator_id, session_status, agent_id)
    except StoreUnavailableError as e:
        raise _store_failure(e) from e

    return SessionListEnvelope(
        sessions=[s.to_document() for s in listing.sessions],
        meta=SessionListMeta(
            total=listing.total,
            active=listing.active,
            completed=listing.completed,
        ),
    )


@router.post(
    "/sessions",
    response_model=SessionCreatedEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a curation session",
)
async def create_session(
    request: CreateSessionRequest,
    service: CurationSessionService = Depends(get_session_service),
) -> SessionCreatedEnvelope:
    """Create a session, filling its queue from the agent's works.

    Raises:
        HTTPException: 400 for a missing curator, 500 if the store fails.
    """
    try:
        created = await service.create_session(request)
    except InvalidInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        ) from e
    except StoreUnavailableError as e:
        raise _store_failure(e) from e

    return SessionCreatedEnvelope(
        session=created.session.to_document(),
        message=created.message,
    )


@router.post(
    "/sessions/{session_id}/decisions",
    response_model=DecisionRecordedEnvelope,
    summary="Record a curation decision",
)
async def record_decision(
    session_id: str,
    request: RecordDecisionRequest,
    service: CurationSessionService = Depends(get_session_service),
) -> DecisionRecordedEnvelope:
    """Record a decision on a work in the session.

    Raises:
        HTTPException: 400 for an invalid decision or a work outside the
            session, 404 if the session does not exist, 500 if the store fails.
    """
    try:
        outcome = await service.record_decision(
            session_id,
            request.work_id or "",
            request.decision or "",
            curator_id=request.curator_id,
            reason=request.reason,
            time_spent=request.time_spent,
        )
    except SessionNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message,
        ) from e
    except InvalidInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        ) from e
    except StoreUnavailableError as e:
        raise _store_failure(e) from e

    progress = outcome.progress
    return DecisionRecordedEnvelope(
        decision=outcome.decision.to_document(),
        session_status=outcome.session_status.value,
        progress=DecisionProgressResponse(
            reviewed=progress.reviewed,
            remaining=progress.remaining,
            accepted=progress.accepted,
            rejected=progress.rejected,
            maybe=progress.maybe,
            target_progress=progress.target_progress,
        ),
        next_work_id=outcome.next_work_id,
    )


@router.get(
    "/sessions/{session_id}/decisions",
    response_model=SessionDecisionsEnvelope,
    summary="Get session decisions",
)
async def get_session_decisions(
    session_id: str,
    service: CurationSessionService = Depends(get_session_service),
) -> SessionDecisionsEnvelope:
    """Get a session's decisions enriched with work details.

    Raises:
        HTTPException: 404 if the session does not exist, 500 if the store fails.
    """
    try:
        result = await service.get_session_decisions(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message,
        ) from e
    except StoreUnavailableError as e:
        raise _store_failure(e) from e

    return SessionDecisionsEnvelope(
        session_id=result.session_id,
        decisions=result.decisions,
        summary=result.summary,
    )
