# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for curator insight rules."""

from dataclasses import replace

import pytest

from eden_academy.domains.curation.insights import (
    INSIGHT_RULES,
    InsightMetrics,
    generate_insights,
)


@pytest.fixture
def quiet_metrics():
    """Metrics that trigger no rule."""
    return InsightMetrics(
        total_reviews=50,
        acceptance_rate=50.0,
        average_review_time=20.0,
        average_quality_accepted=80.0,
        average_quality_rejected=60.0,
        consistency_score=75.0,
    )


class TestInsightRules:
    """Tests for individual rule boundaries."""

    def test_no_insights_for_typical_curator(self, quiet_metrics, fixed_now):
        """Test that typical metrics produce no insights."""
        assert generate_insights(quiet_metrics, fixed_now) == []

    @pytest.mark.parametrize(
        "change,expected",
        [
            ({"acceptance_rate": 19.9}, [("acceptance_rate", "suggestion")]),
            ({"acceptance_rate": 20.0}, []),
            ({"acceptance_rate": 80.0}, []),
            ({"acceptance_rate": 80.1}, [("acceptance_rate", "suggestion")]),
            ({"average_review_time": 4.9}, [("review_time", "warning")]),
            ({"average_review_time": 5.0}, []),
            ({"average_review_time": 60.0}, []),
            ({"average_review_time": 60.5}, [("review_time", "info")]),
            ({"average_quality_accepted": 59.0}, [("quality_inversion", "warning")]),
            ({"average_quality_accepted": 60.0}, []),
            ({"consistency_score": 59.9}, [("consistency", "suggestion")]),
            ({"consistency_score": 60.0}, []),
            ({"total_reviews": 100}, []),
            ({"total_reviews": 101}, [("high_activity", "info")]),
        ],
    )
    def test_rule_boundaries(self, quiet_metrics, fixed_now, change, expected):
        """Test that each rule fires strictly past its threshold."""
        insights = generate_insights(replace(quiet_metrics, **change), fixed_now)

        assert [(i.type, i.severity) for i in insights] == expected

    def test_all_rules_fire_in_table_order(self, fixed_now):
        """Test that independent rules all fire, in table order."""
        metrics = InsightMetrics(
            total_reviews=150,
            acceptance_rate=10.0,
            average_review_time=2.0,
            average_quality_accepted=40.0,
            average_quality_rejected=70.0,
            consistency_score=55.0,
        )

        insights = generate_insights(metrics, fixed_now)

        assert [i.type for i in insights] == [
            "acceptance_rate",
            "review_time",
            "quality_inversion",
            "consistency",
            "high_activity",
        ]

    def test_messages_are_fixed_text(self, fixed_now):
        """Test that messages come straight from the rule table."""
        metrics = InsightMetrics(
            total_reviews=0,
            acceptance_rate=0.0,
            average_review_time=0.0,
            average_quality_accepted=0.0,
            average_quality_rejected=0.0,
            consistency_score=50.0,
        )

        insights = generate_insights(metrics, fixed_now)

        assert insights[0].message == (
            "Your acceptance rate is very selective. Consider if criteria might be too strict."
        )
        assert {i.message for i in insights} <= {rule.message for rule in INSIGHT_RULES}

    def test_to_dict(self, quiet_metrics, fixed_now):
        """Test insight serialization."""
        insight = generate_insights(replace(quiet_metrics, total_reviews=500), fixed_now)[0]

        assert insight.to_dict() == {
            "type": "high_activity",
            "message": "High curation activity! Take breaks to maintain decision quality.",
            "severity": "info",
            "timestamp": fixed_now.isoformat(),
        }
