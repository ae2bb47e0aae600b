# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Curation store contract.

Every backend provides the same read contract used by analytics and the
write contract used by the session workflow. Missing data (no file, no
rows) is reported as empty collections or None; any other failure is
raised as StoreUnavailableError.
"""

from abc import ABC, abstractmethod

from eden_academy.domains.curation.models import Collaboration, CurationSession, Work


class CurationStore(ABC):
    """Abstract base class for curation stores.

    Example:
        >>> store = JsonFileStore(Path("data"))
        >>> sessions = await store.list_sessions()
        >>> work = await store.get_work_by_id("abraham", "abraham_001")
    """

    backend_name: str = "base"

    @abstractmethod
    async def list_sessions(self) -> list[CurationSession]:
        """Return every stored curation session."""

    @abstractmethod
    async def save_session(self, session: CurationSession) -> None:
        """Insert or replace a session by id."""

    @abstractmethod
    async def get_work_by_id(self, agent_id: str, work_id: str) -> Work | None:
        """Find a work inside an agent's partition.

        Args:
            agent_id: Owning agent (the work id prefix).
            work_id: Full work identifier.

        Returns:
            The work, or None if the agent or work is unknown.
        """

    @abstractmethod
    async def list_works(self, agent_id: str) -> list[Work]:
        """Return every work of an agent."""

    @abstractmethod
    async def save_work(self, agent_id: str, work: Work) -> None:
        """Insert or replace a work in an agent's partition."""

    @abstractmethod
    async def list_collaborations(self) -> list[Collaboration]:
        """Return every stored collaboration."""

    async def get_session(self, session_id: str) -> CurationSession | None:
        """Find a session by id.

        Args:
            session_id: Session identifier.

        Returns:
            The session, or None if it does not exist.
        """
        for session in await self.list_sessions():
            if session.id == session_id:
                return session
        return None

    async def check_health(self) -> bool:
        """Check that the store can be read."""
        await self.list_sessions()
        return True

    async def close(self) -> None:
        """Release resources held by the store."""
