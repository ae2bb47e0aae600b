# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Curation record models.

Pydantic models for the records kept in the curation stores: sessions
with their decision logs, multi-curator collaborations and agent works.

Stored documents use camelCase keys. Models accept both camelCase and
snake_case on input and preserve unknown keys, so a record read from a
store and written back loses nothing.

Example:
    >>> session = CurationSession.model_validate(raw)
    >>> session.decisions[0].work_id
    'abraham_001'
    >>> session.to_document()["workQueue"]
    ['abraham_002']
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, TypeVar

from pydantic import (
    AfterValidator,
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
)
from pydantic.alias_generators import to_camel

from eden_academy.utils.datetime import assume_utc


# Naive values get UTC attached; aware values keep their own offset.
Timestamp = Annotated[datetime, AfterValidator(assume_utc)]

T = TypeVar("T")


def _none_as_empty(value: Any) -> Any:
    return [] if value is None else value


# Explicit nulls in stored documents read as empty lists.
NullableList = Annotated[list[T], BeforeValidator(_none_as_empty)]


class DecisionType(str, Enum):
    """Decision a curator can record for a work."""

    ACCEPT = "accept"
    REJECT = "reject"
    MAYBE = "maybe"
    SKIP = "skip"


class SessionStatus(str, Enum):
    """Lifecycle status of a curation session."""

    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class CurationModel(BaseModel):
    """Base model for stored curation documents."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_document(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON document kept in stores."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ============================================================================
# Sessions
# ============================================================================


class CurationDecision(CurationModel):
    """A single accept/reject/maybe/skip decision on a work."""

    work_id: str
    curator_id: str
    decision: DecisionType
    timestamp: Timestamp
    time_spent: float | None = Field(
        default=None,
        validation_alias=AliasChoices("timeSpent", "timeSpentMs", "time_spent"),
        serialization_alias="timeSpent",
    )
    reason: str | None = None

    @property
    def agent_id(self) -> str:
        """Agent segment of the work id ("{agentId}_{suffix}")."""
        return self.work_id.split("_")[0]


class SessionCollaborator(CurationModel):
    """A curator contributing decisions to someone else's session."""

    curator_id: str
    role: str | None = None
    joined_at: Timestamp | None = None
    active: bool = True


class DateRange(CurationModel):
    """Optional creation-date window for session work selection."""

    start: Timestamp | None = None
    end: Timestamp | None = None


class SessionCriteria(CurationModel):
    """Filters used to populate a session's work queue."""

    themes: list[str] | None = None
    min_quality: float | None = None
    media_types: list[str] | None = None
    date_range: DateRange | None = None


class CurationSession(CurationModel):
    """A curator's review session and its decision log."""

    id: str
    curator_id: str
    title: str = ""
    goal: str = ""
    status: SessionStatus = SessionStatus.ACTIVE
    target_count: int | None = None
    criteria: SessionCriteria = Field(default_factory=SessionCriteria)

    work_queue: NullableList[str] = Field(default_factory=list)
    reviewed: NullableList[str] = Field(default_factory=list)
    accepted: NullableList[str] = Field(default_factory=list)
    rejected: NullableList[str] = Field(default_factory=list)
    maybe: NullableList[str] = Field(default_factory=list)

    started_at: Timestamp
    last_active_at: Timestamp | None = None
    completed_at: Timestamp | None = None
    total_review_time: float = 0
    average_decision_time: float = 0

    collaborators: NullableList[SessionCollaborator] = Field(default_factory=list)
    decisions: NullableList[CurationDecision] = Field(default_factory=list)

    def involves(self, curator_id: str, active_only: bool = False) -> bool:
        """Check whether a curator owns or collaborates on this session.

        Args:
            curator_id: Curator to look for.
            active_only: Ignore collaborators that are no longer active.

        Returns:
            True if the curator is the owner or a matching collaborator.
        """
        if self.curator_id == curator_id:
            return True
        return any(
            c.curator_id == curator_id and (c.active or not active_only)
            for c in self.collaborators
        )

    def decisions_by(self, curator_id: str) -> list[CurationDecision]:
        """Decisions recorded by one curator, in session order."""
        return [d for d in self.decisions if d.curator_id == curator_id]


# ============================================================================
# Collaborations
# ============================================================================


class CollaborationParticipant(CurationModel):
    """Curator taking part in a collaboration."""

    curator_id: str
    name: str | None = None
    role: str | None = None
    active: bool = True


class CollaborationVote(CurationModel):
    """One curator's vote on a collaborative decision."""

    curator_id: str
    vote: str


class CollaborationDecision(CurationModel):
    """A collaborative decision with its votes and final outcome."""

    work_id: str | None = None
    votes: NullableList[CollaborationVote] = Field(default_factory=list)
    outcome: str | None = None


class Collaboration(CurationModel):
    """Multi-curator collaboration with voted decisions."""

    id: str | None = None
    title: str | None = None
    participants: NullableList[CollaborationParticipant] = Field(default_factory=list)
    decisions: NullableList[CollaborationDecision] = Field(default_factory=list)

    def has_participant(self, curator_id: str) -> bool:
        """Check whether a curator is listed as a participant."""
        return any(p.curator_id == curator_id for p in self.participants)


# ============================================================================
# Works
# ============================================================================


class RegistryAnalysis(CurationModel):
    """Registry-time analysis cached for a work."""

    quality_score: float | None = None
    style_attributes: NullableList[str] = Field(default_factory=list)


class WorkAnalysis(CurationModel):
    """Analysis tiers attached to a work."""

    registry: RegistryAnalysis | None = None


class Work(CurationModel):
    """A work produced by an agent."""

    id: str
    title: str | None = None
    medium: str | None = None
    themes: NullableList[str] = Field(default_factory=list)
    created_at: Timestamp | None = None
    files: NullableList[dict[str, Any]] = Field(default_factory=list)
    analysis: WorkAnalysis | None = None
    curation: dict[str, Any] | None = None

    @property
    def quality_score(self) -> float | None:
        """Registry quality score, if the work has been analyzed."""
        if self.analysis is None or self.analysis.registry is None:
            return None
        return self.analysis.registry.quality_score

    @property
    def style_attributes(self) -> list[str]:
        """Registry style attributes, empty if not analyzed."""
        if self.analysis is None or self.analysis.registry is None:
            return []
        return self.analysis.registry.style_attributes

    @property
    def thumbnail(self) -> str | None:
        """URL of the first attached file."""
        if not self.files:
            return None
        return self.files[0].get("url")
