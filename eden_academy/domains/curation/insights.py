# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Curator insight rules.

Insights are produced by a fixed table of rules evaluated against the
computed metrics. Rules are independent: every rule whose condition holds
adds one insight, in table order. Messages are fixed text.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable


@dataclass(frozen=True)
class InsightMetrics:
    """Metrics the insight rules are evaluated against."""

    total_reviews: int
    acceptance_rate: float
    average_review_time: float
    average_quality_accepted: float
    average_quality_rejected: float
    consistency_score: float


@dataclass(frozen=True)
class Insight:
    """A generated observation about a curator's behavior."""

    type: str
    message: str
    severity: str
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "type": self.type,
            "message": self.message,
            "severity": self.severity,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class InsightRule:
    """One row of the insight table."""

    type: str
    severity: str
    message: str
    condition: Callable[[InsightMetrics], bool]


INSIGHT_RULES: tuple[InsightRule, ...] = (
    InsightRule(
        type="acceptance_rate",
        severity="suggestion",
        message="Your acceptance rate is very selective. Consider if criteria might be too strict.",
        condition=lambda m: m.acceptance_rate < 20,
    ),
    InsightRule(
        type="acceptance_rate",
        severity="suggestion",
        message="High acceptance rate detected. Ensure quality standards are maintained.",
        condition=lambda m: m.acceptance_rate > 80,
    ),
    InsightRule(
        type="review_time",
        severity="warning",
        message="Very quick review times. Consider spending more time evaluating each work.",
        condition=lambda m: m.average_review_time < 5,
    ),
    InsightRule(
        type="review_time",
        severity="info",
        message="Long review times detected. Consider setting time limits to improve efficiency.",
        condition=lambda m: m.average_review_time > 60,
    ),
    InsightRule(
        type="quality_inversion",
        severity="warning",
        message="Accepting lower quality works than rejecting. Review your criteria.",
        condition=lambda m: m.average_quality_accepted < m.average_quality_rejected,
    ),
    InsightRule(
        type="consistency",
        severity="suggestion",
        message="Inconsistent decision patterns detected. Consider documenting your criteria.",
        condition=lambda m: m.consistency_score < 60,
    ),
    InsightRule(
        type="high_activity",
        severity="info",
        message="High curation activity! Take breaks to maintain decision quality.",
        condition=lambda m: m.total_reviews > 100,
    ),
)


def generate_insights(metrics: InsightMetrics, timestamp: datetime) -> list[Insight]:
    """Evaluate the insight table against a curator's metrics.

    Args:
        metrics: Computed curator metrics.
        timestamp: Timestamp stamped on every insight (the report time).

    Returns:
        Insights of every matching rule, in table order.
    """
    return [
        Insight(
            type=rule.type,
            message=rule.message,
            severity=rule.severity,
            timestamp=timestamp,
        )
        for rule in INSIGHT_RULES
        if rule.condition(metrics)
    ]
