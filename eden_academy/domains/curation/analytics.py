# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Curator analytics module.

This module computes a descriptive-statistics report of one curator's
accept/reject behavior over a time period.

The CuratorAnalyticsEngine reads from a curation store:
- Sessions: decision logs of sessions the curator owns or collaborates on
- Works: quality scores, themes and styles of the judged works
- Collaborations: multi-curator votes and their outcomes

Every call recomputes the report from the store; nothing is cached
between calls.

Usage:
    from eden_academy.domains.curation import CuratorAnalyticsEngine

    engine = CuratorAnalyticsEngine(store)
    result = await engine.compute_analytics("nina", period="month")
    print(result.report.activity.acceptance_rate)
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING, Any, NamedTuple

from eden_academy.domains.curation.exceptions import InvalidInputError
from eden_academy.domains.curation.insights import Insight, InsightMetrics, generate_insights
from eden_academy.domains.curation.models import (
    Collaboration,
    CurationDecision,
    CurationSession,
    DecisionType,
    SessionStatus,
    Work,
)
from eden_academy.utils.datetime import EPOCH, ensure_utc, utc_now

if TYPE_CHECKING:
    from eden_academy.infrastructure.storage.base import CurationStore

logger = logging.getLogger(__name__)


class AnalyticsPeriod(str, Enum):
    """Reporting window for curator analytics."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


# Fixed offsets, not calendar-aware: a month is always 30 days.
PERIOD_OFFSETS: dict[AnalyticsPeriod, timedelta] = {
    AnalyticsPeriod.DAY: timedelta(hours=24),
    AnalyticsPeriod.WEEK: timedelta(days=7),
    AnalyticsPeriod.MONTH: timedelta(days=30),
    AnalyticsPeriod.YEAR: timedelta(days=365),
}

# Placeholders until exhibition and peer-review data is tracked
EXHIBITION_SUCCESS_PLACEHOLDER = 75
PEER_AGREEMENT_PLACEHOLDER = 80

NEUTRAL_CONSISTENCY = 50.0
MIN_DECISIONS_FOR_CONSISTENCY = 10
QUALITY_BUCKET_WIDTH = 10
MIN_THEME_DECISIONS = 3
MAX_FAVORED_THEMES = 5
MAX_FAVORED_STYLES = 5
PEAK_HOURS_COUNT = 3
MIN_BIAS_BUCKET_SIZE = 5
MIN_FATIGUE_DECISIONS = 20
DEFAULT_BATCH_SIZE = 20
DEFAULT_SESSION_MINUTES = 30


# ============================================================================
# Report data
# ============================================================================


@dataclass(frozen=True)
class ActivityMetrics:
    """Volume and pace of a curator's reviews."""

    total_reviews: int = 0
    total_decisions: int = 0
    acceptance_rate: float = 0.0
    average_review_time: float = 0.0
    peak_hours: list[int] = field(default_factory=list)
    sessions_completed: int = 0


@dataclass(frozen=True)
class QualityMetrics:
    """How decisions relate to registry quality scores and peers."""

    average_quality_accepted: float = 0.0
    average_quality_rejected: float = 0.0
    consistency_score: float = NEUTRAL_CONSISTENCY
    disagreement_rate: float = 0.0


@dataclass(frozen=True)
class ThemePreference:
    """Acceptance rate for one theme."""

    theme: str
    acceptance_rate: float


@dataclass(frozen=True)
class AgentPreference:
    """Acceptance rate for works of one agent."""

    agent_id: str
    acceptance_rate: float


@dataclass(frozen=True)
class PreferenceAnalysis:
    """Themes, styles and agents a curator tends to accept."""

    favored_themes: list[ThemePreference] = field(default_factory=list)
    favored_styles: list[str] = field(default_factory=list)
    favored_agents: list[AgentPreference] = field(default_factory=list)
    bias_indicators: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class PerformanceMetrics:
    """Session-level performance indicators."""

    exhibition_success: float = EXHIBITION_SUCCESS_PLACEHOLDER
    peer_agreement: float = PEER_AGREEMENT_PLACEHOLDER
    fatigue_indicator: float = 0.0
    optimal_batch_size: int = DEFAULT_BATCH_SIZE
    optimal_session_length: int = DEFAULT_SESSION_MINUTES


@dataclass(frozen=True)
class CuratorAnalyticsReport:
    """Complete analytics report for one curator and period."""

    curator_id: str
    period: AnalyticsPeriod
    activity: ActivityMetrics
    quality: QualityMetrics
    preferences: PreferenceAnalysis
    performance: PerformanceMetrics
    insights: list[Insight]
    generated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "curatorId": self.curator_id,
            "period": self.period.value,
            "activity": {
                "totalReviews": self.activity.total_reviews,
                "totalDecisions": self.activity.total_decisions,
                "acceptanceRate": self.activity.acceptance_rate,
                "averageReviewTime": self.activity.average_review_time,
                "peakHours": list(self.activity.peak_hours),
                "sessionsCompleted": self.activity.sessions_completed,
            },
            "quality": {
                "averageQualityAccepted": self.quality.average_quality_accepted,
                "averageQualityRejected": self.quality.average_quality_rejected,
                "consistencyScore": self.quality.consistency_score,
                "disagreementRate": self.quality.disagreement_rate,
            },
            "preferences": {
                "favoredThemes": [
                    {"theme": t.theme, "acceptanceRate": t.acceptance_rate}
                    for t in self.preferences.favored_themes
                ],
                "favoredStyles": list(self.preferences.favored_styles),
                "favoredAgents": [
                    {"agentId": a.agent_id, "acceptanceRate": a.acceptance_rate}
                    for a in self.preferences.favored_agents
                ],
                "biasIndicators": dict(self.preferences.bias_indicators),
            },
            "performance": {
                "exhibitionSuccess": self.performance.exhibition_success,
                "peerAgreement": self.performance.peer_agreement,
                "fatigueIndicator": self.performance.fatigue_indicator,
                "optimalBatchSize": self.performance.optimal_batch_size,
                "optimalSessionLength": self.performance.optimal_session_length,
            },
            "insights": [insight.to_dict() for insight in self.insights],
            "generatedAt": self.generated_at.isoformat(),
        }


@dataclass(frozen=True)
class CuratorAnalyticsResult:
    """A report together with the window it was computed over."""

    report: CuratorAnalyticsReport
    period_start: datetime
    period_end: datetime
    sessions_analyzed: int


class ResolvedDecision(NamedTuple):
    """An accept/reject decision paired with the work it judged."""

    decision: CurationDecision
    work: Work


@dataclass
class _Tally:
    accepted: int = 0
    rejected: int = 0

    def add(self, decision: DecisionType) -> None:
        if decision == DecisionType.ACCEPT:
            self.accepted += 1
        elif decision == DecisionType.REJECT:
            self.rejected += 1

    @property
    def total(self) -> int:
        return self.accepted + self.rejected

    @property
    def acceptance_rate(self) -> float:
        return self.accepted / self.total * 100 if self.total else 0.0


# ============================================================================
# Engine
# ============================================================================


class CuratorAnalyticsEngine:
    """Computes curator analytics reports from a curation store.

    The engine holds no state besides the store handle; each call reads
    the store again. Work lookups are memoized within a single call.

    Attributes:
        _store: Curation store to read sessions, works and collaborations from.
    """

    def __init__(self, store: "CurationStore") -> None:
        """Initialize the engine.

        Args:
            store: Curation store.
        """
        self._store = store

    async def compute_analytics(
        self,
        curator_id: str | None,
        period: str | AnalyticsPeriod | None = AnalyticsPeriod.ALL,
        now: datetime | None = None,
    ) -> CuratorAnalyticsResult:
        """Compute the analytics report for a curator.

        Args:
            curator_id: Curator to analyze.
            period: Reporting window (day, week, month, year, all).
            now: Reference time, defaults to the current UTC time.

        Returns:
            CuratorAnalyticsResult with the report and its window.

        Raises:
            InvalidInputError: If curator_id is missing or period is unknown.
            StoreUnavailableError: If the store fails unexpectedly.

        Example:
            >>> result = await engine.compute_analytics("nina", "week")
            >>> result.report.activity.total_reviews
            42
        """
        if curator_id is None or not str(curator_id).strip():
            raise InvalidInputError("curatorId is required")

        resolved_period = resolve_period(period)
        now = ensure_utc(now) if now else utc_now()
        start = period_start(resolved_period, now)

        sessions = select_sessions(await self._store.list_sessions(), curator_id, start)
        decisions = [d for session in sessions for d in session.decisions_by(curator_id)]

        activity = compute_activity(decisions, sessions)

        resolved = await self._resolve_works(decisions)
        accepted_works = [r.work for r in resolved if r.decision.decision == DecisionType.ACCEPT]
        rejected_works = [r.work for r in resolved if r.decision.decision == DecisionType.REJECT]

        quality = QualityMetrics(
            average_quality_accepted=average_quality(accepted_works),
            average_quality_rejected=average_quality(rejected_works),
            consistency_score=consistency_score(decisions, resolved),
            disagreement_rate=disagreement_rate(
                curator_id,
                await self._store.list_collaborations(),
            ),
        )

        preferences = analyze_preferences(decisions, resolved)
        performance = compute_performance(curator_id, sessions)

        insights = generate_insights(
            InsightMetrics(
                total_reviews=activity.total_reviews,
                acceptance_rate=activity.acceptance_rate,
                average_review_time=activity.average_review_time,
                average_quality_accepted=quality.average_quality_accepted,
                average_quality_rejected=quality.average_quality_rejected,
                consistency_score=quality.consistency_score,
            ),
            timestamp=now,
        )

        logger.info(
            "Computed curator analytics: curator=%s, period=%s, sessions=%d, decisions=%d",
            curator_id,
            resolved_period.value,
            len(sessions),
            len(decisions),
        )

        report = CuratorAnalyticsReport(
            curator_id=curator_id,
            period=resolved_period,
            activity=activity,
            quality=quality,
            preferences=preferences,
            performance=performance,
            insights=insights,
            generated_at=now,
        )
        return CuratorAnalyticsResult(
            report=report,
            period_start=start,
            period_end=now,
            sessions_analyzed=len(sessions),
        )

    async def _resolve_works(
        self,
        decisions: list[CurationDecision],
    ) -> list[ResolvedDecision]:
        """Pair accept/reject decisions with their works.

        Works that cannot be found are skipped.
        """
        cache: dict[str, Work | None] = {}
        resolved: list[ResolvedDecision] = []

        for decision in decisions:
            if decision.decision not in (DecisionType.ACCEPT, DecisionType.REJECT):
                continue
            if decision.work_id not in cache:
                cache[decision.work_id] = await self._store.get_work_by_id(
                    decision.agent_id,
                    decision.work_id,
                )
            work = cache[decision.work_id]
            if work is not None:
                resolved.append(ResolvedDecision(decision, work))

        return resolved


# ============================================================================
# Metric computations
# ============================================================================


def resolve_period(period: str | AnalyticsPeriod | None) -> AnalyticsPeriod:
    """Parse a period argument, defaulting to ALL when empty.

    Raises:
        InvalidInputError: If the period is not a known value.
    """
    if not period:
        return AnalyticsPeriod.ALL
    try:
        return AnalyticsPeriod(period)
    except ValueError:
        allowed = ", ".join(p.value for p in AnalyticsPeriod)
        raise InvalidInputError(
            f"Invalid period. Must be one of: {allowed}",
            details={"period": str(period)},
        ) from None


def period_start(period: AnalyticsPeriod, now: datetime) -> datetime:
    """Start of the reporting window ending at now."""
    offset = PERIOD_OFFSETS.get(period)
    if offset is None:
        return EPOCH
    return now - offset


def select_sessions(
    sessions: list[CurationSession],
    curator_id: str,
    start: datetime,
) -> list[CurationSession]:
    """Sessions owned by the curator, or with the curator as an active
    collaborator, started at or after start."""
    return [
        s for s in sessions
        if s.involves(curator_id, active_only=True) and s.started_at >= start
    ]


def compute_activity(
    decisions: list[CurationDecision],
    sessions: list[CurationSession],
) -> ActivityMetrics:
    """Count reviews and decisions, acceptance rate, pace and peak hours."""
    total_reviews = len(decisions)
    total_decisions = sum(1 for d in decisions if d.decision != DecisionType.SKIP)
    accepts = sum(1 for d in decisions if d.decision == DecisionType.ACCEPT)

    acceptance_rate = accepts / total_decisions * 100 if total_decisions else 0.0
    average_review_time = (
        sum(d.time_spent or 0 for d in decisions) / total_reviews / 1000
        if total_reviews
        else 0.0
    )

    # Ties go to the earlier hour
    hour_counts = Counter(d.timestamp.hour for d in decisions)
    peak_hours = [
        hour
        for hour, _ in sorted(hour_counts.items(), key=lambda item: (-item[1], item[0]))
    ][:PEAK_HOURS_COUNT]

    return ActivityMetrics(
        total_reviews=total_reviews,
        total_decisions=total_decisions,
        acceptance_rate=acceptance_rate,
        average_review_time=average_review_time,
        peak_hours=peak_hours,
        sessions_completed=sum(1 for s in sessions if s.status == SessionStatus.COMPLETED),
    )


def average_quality(works: list[Work]) -> float:
    """Mean registry quality score, ignoring works without a score."""
    scores = [w.quality_score for w in works if w.quality_score is not None]
    if not scores:
        return 0.0
    return sum(scores) / len(scores)


def consistency_score(
    decisions: list[CurationDecision],
    resolved: list[ResolvedDecision],
) -> float:
    """How uniformly the curator decides on works of similar quality.

    Decisions are bucketed by quality score in steps of 10. Each bucket
    with at least two decisions scores the share of its majority
    decision; the result is the mean over buckets, as a percentage.

    Returns:
        Score in [50, 100], or 50 with fewer than 10 decisions or no
        bucket of two.
    """
    if len(decisions) < MIN_DECISIONS_FOR_CONSISTENCY:
        return NEUTRAL_CONSISTENCY

    buckets: dict[int, list[DecisionType]] = {}
    for item in resolved:
        score = item.work.quality_score
        if score is None:
            continue
        bucket = math.floor(score / QUALITY_BUCKET_WIDTH) * QUALITY_BUCKET_WIDTH
        buckets.setdefault(bucket, []).append(item.decision.decision)

    consistencies = []
    for outcomes in buckets.values():
        if len(outcomes) < 2:
            continue
        accepts = sum(1 for o in outcomes if o == DecisionType.ACCEPT)
        consistencies.append(max(accepts, len(outcomes) - accepts) / len(outcomes))

    if not consistencies:
        return NEUTRAL_CONSISTENCY
    return sum(consistencies) / len(consistencies) * 100


def disagreement_rate(curator_id: str, collaborations: list[Collaboration]) -> float:
    """Share of the curator's collaboration votes that lost to the outcome."""
    total_votes = 0
    disagreements = 0

    for collaboration in collaborations:
        if not collaboration.has_participant(curator_id):
            continue
        for decision in collaboration.decisions:
            for vote in decision.votes:
                if vote.curator_id != curator_id:
                    continue
                total_votes += 1
                if (vote.vote == "accept" and decision.outcome == "rejected") or (
                    vote.vote == "reject" and decision.outcome == "accepted"
                ):
                    disagreements += 1

    return disagreements / total_votes * 100 if total_votes else 0.0


def analyze_preferences(
    decisions: list[CurationDecision],
    resolved: list[ResolvedDecision],
) -> PreferenceAnalysis:
    """Favored themes, styles and agents plus time-of-day bias."""
    theme_tallies: dict[str, _Tally] = {}
    agent_tallies: dict[str, _Tally] = {}

    for item in resolved:
        for theme in item.work.themes:
            theme_tallies.setdefault(theme, _Tally()).add(item.decision.decision)
        agent_tallies.setdefault(item.decision.agent_id, _Tally()).add(item.decision.decision)

    favored_themes = sorted(
        (
            ThemePreference(theme=theme, acceptance_rate=tally.acceptance_rate)
            for theme, tally in theme_tallies.items()
            if tally.total >= MIN_THEME_DECISIONS
        ),
        key=lambda t: t.acceptance_rate,
        reverse=True,
    )[:MAX_FAVORED_THEMES]

    favored_agents = sorted(
        (
            AgentPreference(agent_id=agent_id, acceptance_rate=tally.acceptance_rate)
            for agent_id, tally in agent_tallies.items()
        ),
        key=lambda a: a.acceptance_rate,
        reverse=True,
    )

    favored_styles: list[str] = []
    for item in resolved:
        if item.decision.decision != DecisionType.ACCEPT:
            continue
        for style in item.work.style_attributes:
            if style not in favored_styles:
                favored_styles.append(style)

    return PreferenceAnalysis(
        favored_themes=favored_themes,
        favored_styles=favored_styles[:MAX_FAVORED_STYLES],
        favored_agents=favored_agents,
        bias_indicators=_bias_indicators(decisions),
    )


def _bias_indicators(decisions: list[CurationDecision]) -> dict[str, float]:
    morning = [d for d in decisions if 6 <= d.timestamp.hour < 12]
    evening = [d for d in decisions if 18 <= d.timestamp.hour < 24]

    indicators: dict[str, float] = {}
    if len(morning) > MIN_BIAS_BUCKET_SIZE and len(evening) > MIN_BIAS_BUCKET_SIZE:
        indicators["timeOfDay"] = abs(_accept_share(morning) - _accept_share(evening)) * 100
    return indicators


def compute_performance(
    curator_id: str,
    sessions: list[CurationSession],
) -> PerformanceMetrics:
    """Fatigue and batch/session sizing across the curator's sessions."""
    fatigue = 0.0
    batch_sizes: list[int] = []

    for session in sessions:
        own = session.decisions_by(curator_id)
        batch_sizes.append(len(own))
        if len(own) >= MIN_FATIGUE_DECISIONS:
            half = len(own) // 2
            drift = abs(_accept_share(own[:half]) - _accept_share(own[half:])) * 100
            fatigue = max(fatigue, drift)

    optimal_batch_size = (
        _round_half_up(sum(batch_sizes) / len(batch_sizes))
        if batch_sizes
        else DEFAULT_BATCH_SIZE
    )

    session_minutes = [s.total_review_time / 60000 for s in sessions]
    optimal_session_length = (
        _round_half_up(sum(session_minutes) / len(session_minutes))
        if session_minutes
        else DEFAULT_SESSION_MINUTES
    )

    return PerformanceMetrics(
        exhibition_success=EXHIBITION_SUCCESS_PLACEHOLDER,
        peer_agreement=PEER_AGREEMENT_PLACEHOLDER,
        fatigue_indicator=fatigue,
        optimal_batch_size=optimal_batch_size,
        optimal_session_length=optimal_session_length,
    )


def _accept_share(decisions: list[CurationDecision]) -> float:
    return sum(1 for d in decisions if d.decision == DecisionType.ACCEPT) / len(decisions)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
