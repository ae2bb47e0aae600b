# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Curation domain package.

This package provides the curation workflow and its analytics:
- Session management and decision recording
- Curator analytics (activity, quality, preferences, performance)
- Rule-based curator insights

Usage:
    from eden_academy.domains.curation import (
        CuratorAnalyticsEngine,
        CurationSessionService,
    )

    engine = CuratorAnalyticsEngine(store)
    result = await engine.compute_analytics("nina", period="week")

    service = CurationSessionService(store)
    outcome = await service.record_decision(session_id, work_id, "accept")
"""

from eden_academy.domains.curation.analytics import (
    AnalyticsPeriod,
    CuratorAnalyticsEngine,
    CuratorAnalyticsReport,
    CuratorAnalyticsResult,
)
from eden_academy.domains.curation.exceptions import (
    CurationError,
    InvalidDecisionError,
    InvalidInputError,
    SessionNotFoundError,
    StoreUnavailableError,
    WorkNotInQueueError,
)
from eden_academy.domains.curation.insights import INSIGHT_RULES, Insight, generate_insights
from eden_academy.domains.curation.models import (
    Collaboration,
    CurationDecision,
    CurationSession,
    DecisionType,
    SessionStatus,
    Work,
)
from eden_academy.domains.curation.sessions import (
    CreateSessionRequest,
    CurationSessionService,
    DecisionOutcome,
    SessionDecisions,
    SessionListing,
)

__all__ = [
    # Analytics
    "AnalyticsPeriod",
    "CuratorAnalyticsEngine",
    "CuratorAnalyticsReport",
    "CuratorAnalyticsResult",
    # Insights
    "INSIGHT_RULES",
    "Insight",
    "generate_insights",
    # Sessions
    "CreateSessionRequest",
    "CurationSessionService",
    "DecisionOutcome",
    "SessionDecisions",
    "SessionListing",
    # Models
    "Collaboration",
    "CurationDecision",
    "CurationSession",
    "DecisionType",
    "SessionStatus",
    "Work",
    # Exceptions
    "CurationError",
    "InvalidDecisionError",
    "InvalidInputError",
    "SessionNotFoundError",
    "StoreUnavailableError",
    "WorkNotInQueueError",
]
