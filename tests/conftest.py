# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests

Record builders return camelCase documents in the same shape as the
academy's data files, so tests can seed a JSON data directory directly.
"""

import json
from collections.abc import Callable, Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

from eden_academy.core.config import clear_settings_cache
from eden_academy.infrastructure.storage import JsonFileStore

FIXED_NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Reload settings from the environment for every test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def fixed_now() -> datetime:
    """Reference time used as "now" by analytics tests."""
    return FIXED_NOW


# =============================================================================
# Data Directory Fixtures
# =============================================================================


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Provide an empty data directory."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def json_store(data_dir: Path) -> JsonFileStore:
    """Provide a JSON store over the test data directory."""
    return JsonFileStore(data_dir)


@pytest.fixture
def seed_data(data_dir: Path) -> Callable[..., None]:
    """Write sessions, works and collaborations into the data directory.

    Example:
        seed_data(
            sessions=[make_session("s1")],
            works={"abraham": [make_work("abraham_001", quality=80)]},
        )
    """

    def _write(path: Path, documents: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(documents), encoding="utf-8")

    def _seed(
        sessions: list[dict[str, Any]] | None = None,
        works: dict[str, list[dict[str, Any]]] | None = None,
        collaborations: list[dict[str, Any]] | None = None,
    ) -> None:
        if sessions is not None:
            _write(data_dir / "curation" / "sessions.json", sessions)
        for agent_id, agent_works in (works or {}).items():
            _write(data_dir / "works" / f"{agent_id}.json", agent_works)
        if collaborations is not None:
            _write(data_dir / "collaborations" / "collaborations.json", collaborations)

    return _seed


# =============================================================================
# Record Builders
# =============================================================================


@pytest.fixture
def make_decision() -> Callable[..., dict[str, Any]]:
    """Build a decision document."""

    def _make(
        work_id: str,
        decision: str,
        curator_id: str = "nina",
        at: datetime = FIXED_NOW - timedelta(days=1),
        time_spent: float | None = 10000,
        **extra: Any,
    ) -> dict[str, Any]:
        document = {
            "workId": work_id,
            "curatorId": curator_id,
            "decision": decision,
            "timestamp": at.isoformat(),
            **extra,
        }
        if time_spent is not None:
            document["timeSpent"] = time_spent
        return document

    return _make


@pytest.fixture
def make_session() -> Callable[..., dict[str, Any]]:
    """Build a session document."""

    def _make(
        session_id: str,
        curator_id: str = "nina",
        decisions: list[dict[str, Any]] | None = None,
        started_at: datetime = FIXED_NOW - timedelta(days=2),
        status: str = "active",
        collaborators: list[dict[str, Any]] | None = None,
        total_review_time: float = 0,
        **extra: Any,
    ) -> dict[str, Any]:
        return {
            "id": session_id,
            "curatorId": curator_id,
            "title": f"Session {session_id}",
            "goal": "",
            "status": status,
            "criteria": {},
            "workQueue": [],
            "reviewed": [],
            "accepted": [],
            "rejected": [],
            "maybe": [],
            "startedAt": started_at.isoformat(),
            "lastActiveAt": started_at.isoformat(),
            "totalReviewTime": total_review_time,
            "averageDecisionTime": 0,
            "collaborators": collaborators or [],
            "decisions": decisions or [],
            **extra,
        }

    return _make


@pytest.fixture
def make_work() -> Callable[..., dict[str, Any]]:
    """Build a work document."""

    def _make(
        work_id: str,
        quality: float | None = None,
        themes: list[str] | None = None,
        styles: list[str] | None = None,
        medium: str = "image",
        created_at: datetime | None = None,
        **extra: Any,
    ) -> dict[str, Any]:
        document: dict[str, Any] = {
            "id": work_id,
            "title": f"Work {work_id}",
            "medium": medium,
            "themes": themes or [],
            "files": [{"url": f"https://cdn.example.com/{work_id}.png"}],
            **extra,
        }
        if created_at is not None:
            document["createdAt"] = created_at.isoformat()
        if quality is not None or styles:
            document["analysis"] = {
                "registry": {
                    "qualityScore": quality,
                    "styleAttributes": styles or [],
                },
            }
        return document

    return _make
