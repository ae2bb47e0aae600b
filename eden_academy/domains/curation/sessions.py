# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Curation session service.

This module provides the CurationSessionService that handles:
- Listing sessions by curator, status or agent
- Creating sessions and populating their work queue from criteria
- Recording decisions and tracking session progress
- Reading back decisions enriched with work details

The decision log written here is what curator analytics reads.

Example:
    >>> service = CurationSessionService(store)
    >>> created = await service.create_session(request)
    >>> outcome = await service.record_decision(
    ...     created.session.id, "abraham_001", "accept", time_spent=12000,
    ... )
    >>> outcome.progress.accepted
    1
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from eden_academy.domains.curation.exceptions import (
    InvalidDecisionError,
    InvalidInputError,
    SessionNotFoundError,
    StoreUnavailableError,
    WorkNotInQueueError,
)
from eden_academy.domains.curation.models import (
    CurationDecision,
    CurationSession,
    DecisionType,
    SessionCollaborator,
    SessionCriteria,
    SessionStatus,
    Work,
)
from eden_academy.utils.datetime import utc_now

if TYPE_CHECKING:
    from eden_academy.infrastructure.storage.base import CurationStore

logger = logging.getLogger(__name__)

VALID_DECISIONS = tuple(d.value for d in DecisionType)


class CreateSessionRequest(BaseModel):
    """Request to open a new curation session."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    curator_id: str = Field(default="", description="Owning curator")
    title: str = Field(default="", description="Session title")
    goal: str = Field(default="", description="What the session should achieve")
    target_count: int | None = Field(default=None, ge=1, description="Accepted works to reach")
    criteria: SessionCriteria = Field(default_factory=SessionCriteria)
    collaborators: list[SessionCollaborator] = Field(default_factory=list)
    agent_id: str | None = Field(default=None, description="Agent whose works fill the queue")
    auto_populate: bool = Field(default=True, description="Fill the queue from criteria")


@dataclass
class SessionListing:
    """Filtered sessions with status counts."""

    sessions: list[CurationSession]
    total: int
    active: int
    completed: int


@dataclass
class CreatedSession:
    """A newly created session."""

    session: CurationSession
    message: str


@dataclass
class DecisionProgress:
    """Progress of a session after a decision."""

    reviewed: int
    remaining: int
    accepted: int
    rejected: int
    maybe: int
    target_progress: str | None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "reviewed": self.reviewed,
            "remaining": self.remaining,
            "accepted": self.accepted,
            "rejected": self.rejected,
            "maybe": self.maybe,
            "targetProgress": self.target_progress,
        }


@dataclass
class DecisionOutcome:
    """Result of recording a decision."""

    decision: CurationDecision
    session_status: SessionStatus
    progress: DecisionProgress
    next_work_id: str | None


@dataclass
class SessionDecisions:
    """Decisions of a session enriched with work details."""

    session_id: str
    decisions: list[dict[str, Any]]
    summary: dict[str, Any]


class CurationSessionService:
    """Service for the session-based curation workflow.

    Attributes:
        _store: Curation store.
    """

    def __init__(self, store: "CurationStore") -> None:
        """Initialize the session service.

        Args:
            store: Curation store.
        """
        self._store = store

    async def list_sessions(
        self,
        curator_id: str | None = None,
        status: str | None = None,
        agent_id: str | None = None,
    ) -> SessionListing:
        """List sessions, most recently active first.

        Args:
            curator_id: Only sessions owned by or shared with this curator.
            status: Only sessions with this status.
            agent_id: Only sessions with queued works of this agent.

        Returns:
            SessionListing with matching sessions and counts.
        """
        sessions = await self._store.list_sessions()

        if curator_id:
            sessions = [s for s in sessions if s.involves(curator_id)]
        if status:
            sessions = [s for s in sessions if s.status.value == status]
        if agent_id:
            sessions = [
                s for s in sessions
                if any(work_id.startswith(agent_id) for work_id in s.work_queue)
            ]

        sessions.sort(key=lambda s: s.last_active_at or s.started_at, reverse=True)

        return SessionListing(
            sessions=sessions,
            total=len(sessions),
            active=sum(1 for s in sessions if s.status == SessionStatus.ACTIVE),
            completed=sum(1 for s in sessions if s.status == SessionStatus.COMPLETED),
        )

    async def create_session(self, request: CreateSessionRequest) -> CreatedSession:
        """Create a session and fill its work queue.

        When an agent is given and auto-population is enabled, the queue
        holds that agent's works matching the session criteria.

        Args:
            request: Session creation request.

        Returns:
            CreatedSession with the stored session.

        Raises:
            InvalidInputError: If the curator id is blank.
        """
        if not request.curator_id.strip():
            raise InvalidInputError("curatorId is required")

        now = utc_now()
        session = CurationSession(
            id=str(uuid4()),
            curator_id=request.curator_id,
            title=request.title,
            goal=request.goal,
            status=SessionStatus.ACTIVE,
            target_count=request.target_count,
            criteria=request.criteria,
            started_at=now,
            last_active_at=now,
            collaborators=request.collaborators,
        )

        if request.agent_id and request.auto_populate:
            works = await self._store.list_works(request.agent_id)
            session.work_queue = [w.id for w in filter_works(works, request.criteria)]

        await self._store.save_session(session)

        logger.info(
            "Created curation session: id=%s, curator=%s, queued=%d",
            session.id,
            session.curator_id,
            len(session.work_queue),
        )

        return CreatedSession(
            session=session,
            message=f"Session created with {len(session.work_queue)} works to review",
        )

    async def record_decision(
        self,
        session_id: str,
        work_id: str,
        decision: str,
        curator_id: str | None = None,
        reason: str | None = None,
        time_spent: float | None = None,
    ) -> DecisionOutcome:
        """Record a curator's decision on a queued work.

        Args:
            session_id: Session identifier.
            work_id: Work being judged.
            decision: One of accept, reject, maybe, skip.
            curator_id: Deciding curator, defaults to the session owner.
            reason: Optional free-text reason.
            time_spent: Milliseconds spent on the work.

        Returns:
            DecisionOutcome with the recorded decision and progress.

        Raises:
            InvalidInputError: If the work id is blank.
            InvalidDecisionError: If decision is not a known value.
            SessionNotFoundError: If the session does not exist.
            WorkNotInQueueError: If the work is neither queued nor reviewed.
        """
        if not work_id:
            raise InvalidInputError("workId is required")
        if decision not in VALID_DECISIONS:
            raise InvalidDecisionError(
                f"Invalid decision. Must be one of: {', '.join(VALID_DECISIONS)}"
            )
        decision_type = DecisionType(decision)

        session = await self._store.get_session(session_id)
        if session is None:
            raise SessionNotFoundError("Session not found", details={"session_id": session_id})

        if work_id not in session.work_queue and work_id not in session.reviewed:
            raise WorkNotInQueueError(
                "Work not in session queue",
                details={"session_id": session_id, "work_id": work_id},
            )

        now = utc_now()
        spent = time_spent or 0
        record = CurationDecision(
            work_id=work_id,
            curator_id=curator_id or session.curator_id,
            decision=decision_type,
            timestamp=now,
            time_spent=spent,
            reason=reason,
        )
        session.decisions.append(record)

        session.work_queue = [w for w in session.work_queue if w != work_id]
        session.accepted = [w for w in session.accepted if w != work_id]
        session.rejected = [w for w in session.rejected if w != work_id]
        session.maybe = [w for w in session.maybe if w != work_id]

        if decision_type == DecisionType.ACCEPT:
            session.accepted.append(work_id)
        elif decision_type == DecisionType.REJECT:
            session.rejected.append(work_id)
        elif decision_type == DecisionType.MAYBE:
            session.maybe.append(work_id)
        else:
            # Skipped works go to the back of the queue
            session.work_queue.append(work_id)

        if decision_type != DecisionType.SKIP and work_id not in session.reviewed:
            session.reviewed.append(work_id)

        session.last_active_at = now
        session.total_review_time += spent
        session.average_decision_time = sum(
            d.time_spent or 0 for d in session.decisions
        ) / len(session.decisions)

        if session.target_count and len(session.accepted) >= session.target_count:
            session.status = SessionStatus.COMPLETED
            session.completed_at = now
        elif not session.work_queue and not session.maybe:
            session.status = SessionStatus.COMPLETED
            session.completed_at = now

        if decision_type == DecisionType.ACCEPT:
            await self._mark_work_curated(work_id, session, record.curator_id)

        await self._store.save_session(session)

        logger.info(
            "Recorded decision: session=%s, work=%s, decision=%s, status=%s",
            session.id,
            work_id,
            decision_type.value,
            session.status.value,
        )

        return DecisionOutcome(
            decision=record,
            session_status=session.status,
            progress=DecisionProgress(
                reviewed=len(session.reviewed),
                remaining=len(session.work_queue),
                accepted=len(session.accepted),
                rejected=len(session.rejected),
                maybe=len(session.maybe),
                target_progress=(
                    f"{len(session.accepted)}/{session.target_count}"
                    if session.target_count
                    else None
                ),
            ),
            next_work_id=session.work_queue[0] if session.work_queue else None,
        )

    async def get_session_decisions(self, session_id: str) -> SessionDecisions:
        """Get a session's decisions with work details.

        Args:
            session_id: Session identifier.

        Returns:
            SessionDecisions with enriched decisions and a summary.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        session = await self._store.get_session(session_id)
        if session is None:
            raise SessionNotFoundError("Session not found", details={"session_id": session_id})

        works: dict[str, Work | None] = {}
        enriched: list[dict[str, Any]] = []
        for decision in session.decisions:
            if decision.work_id not in works:
                works[decision.work_id] = await self._store.get_work_by_id(
                    decision.agent_id,
                    decision.work_id,
                )
            work = works[decision.work_id]
            enriched.append({
                **decision.to_document(),
                "work": _work_summary(work) if work else None,
            })

        return SessionDecisions(
            session_id=session.id,
            decisions=enriched,
            summary={
                "total": len(session.decisions),
                "accepted": len(session.accepted),
                "rejected": len(session.rejected),
                "maybe": len(session.maybe),
                "averageTimePerDecision": session.average_decision_time,
                "totalTimeSpent": session.total_review_time,
            },
        )

    async def _mark_work_curated(
        self,
        work_id: str,
        session: CurationSession,
        curator_id: str,
    ) -> None:
        """Stamp an accepted work with the session that curated it.

        Failures are logged; the decision itself is still recorded.
        """
        agent_id = work_id.split("_")[0]
        try:
            work = await self._store.get_work_by_id(agent_id, work_id)
            if work is None:
                return

            curation = work.curation or {
                "featured": False,
                "curated": False,
                "score": None,
                "tags": [],
                "collections": [],
                "exhibitions": [],
                "annotations": [],
                "history": [],
            }
            timestamp = utc_now().isoformat()
            curation.update({
                "curated": True,
                "curatedAt": timestamp,
                "curatedBy": curator_id,
                "sessionId": session.id,
                "sessionTitle": session.title,
            })
            curation.setdefault("history", []).append({
                "action": "session-curate",
                "metadata": {
                    "sessionId": session.id,
                    "sessionTitle": session.title,
                    "goal": session.goal,
                },
                "timestamp": timestamp,
                "curatorId": curator_id,
            })
            work.curation = curation

            await self._store.save_work(agent_id, work)
        except StoreUnavailableError as e:
            logger.error("Failed to update work curation for %s: %s", work_id, e)


def filter_works(works: list[Work], criteria: SessionCriteria) -> list[Work]:
    """Select works matching session criteria.

    Args:
        works: Candidate works.
        criteria: Themes (any overlap), minimum quality, media types and
            creation date window.

    Returns:
        Matching works in their original order.
    """
    selected = works

    if criteria.themes:
        themes = set(criteria.themes)
        selected = [w for w in selected if themes.intersection(w.themes)]

    if criteria.min_quality:
        selected = [w for w in selected if (w.quality_score or 0) >= criteria.min_quality]

    if criteria.media_types:
        selected = [w for w in selected if w.medium in criteria.media_types]

    if criteria.date_range:
        start = criteria.date_range.start
        end = criteria.date_range.end
        if start:
            selected = [w for w in selected if w.created_at and w.created_at >= start]
        if end:
            selected = [w for w in selected if w.created_at and w.created_at <= end]

    return selected


def _work_summary(work: Work) -> dict[str, Any]:
    return {
        "id": work.id,
        "title": work.title,
        "medium": work.medium,
        "themes": work.themes,
        "thumbnail": work.thumbnail,
    }
