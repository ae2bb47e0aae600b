# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database curation store using SQLAlchemy async.

Keeps the same documents as the JSON store, one row per session, work or
collaboration, with the camelCase document in a JSON column and the
lookup keys in indexed columns.

Uses SQLAlchemy 2.0 async API (aiosqlite by default, any async driver
works).

Example:
    store = DatabaseStore("sqlite+aiosqlite:///./data/eden_academy.db")
    await store.init()

    sessions = await store.list_sessions()

    await store.close()
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, AsyncIterator

from pydantic import ValidationError
from sqlalchemy import JSON, DateTime, Integer, String, select
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from eden_academy.domains.curation.exceptions import StoreUnavailableError
from eden_academy.domains.curation.models import Collaboration, CurationSession, Work
from eden_academy.infrastructure.storage.base import CurationStore

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for curation tables."""


class CurationSessionRecord(Base):
    """Stored curation session."""

    __tablename__ = "curation_sessions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    curator_id: Mapped[str] = mapped_column(String(128), index=True)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON)


class WorkRecord(Base):
    """Stored agent work."""

    __tablename__ = "works"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    agent_id: Mapped[str] = mapped_column(String(64), index=True)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON)


class CollaborationRecord(Base):
    """Stored collaboration."""

    __tablename__ = "collaborations"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    collaboration_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON)


class DatabaseStore(CurationStore):
    """Curation store backed by an SQL database.

    Attributes:
        database_url: SQLAlchemy async database URL.
    """

    backend_name = "database"

    def __init__(self, database_url: str, echo: bool = False) -> None:
        """Initialize the store.

        Args:
            database_url: SQLAlchemy async database URL.
            echo: Log SQL statements.
        """
        self.database_url = database_url
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    async def init(self) -> None:
        """Create the engine and the tables if they do not exist.

        Raises:
            StoreUnavailableError: If the database cannot be reached.
        """
        url = make_url(self.database_url)
        if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        try:
            self._engine = create_async_engine(
                self.database_url,
                pool_pre_ping=True,
                echo=self._echo,
            )
            self._sessionmaker = async_sessionmaker(
                bind=self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("Failed to initialize curation database", e) from e

        logger.info("Curation database ready: %s", url.render_as_string(hide_password=True))

    async def close(self) -> None:
        """Dispose of the connection pool."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._sessionmaker = None

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        if self._sessionmaker is None:
            raise StoreUnavailableError(
                "Curation database not initialized. Call init() first."
            )

        async with self._sessionmaker() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise StoreUnavailableError("Database operation failed", e) from e
            except Exception:
                await session.rollback()
                raise

    # =========================================================================
    # Sessions
    # =========================================================================

    async def list_sessions(self) -> list[CurationSession]:
        async with self._session() as session:
            result = await session.execute(
                select(CurationSessionRecord.payload).order_by(
                    CurationSessionRecord.started_at,
                    CurationSessionRecord.id,
                )
            )
            payloads = result.scalars().all()
        return _validate_all(CurationSession, payloads)

    async def get_session(self, session_id: str) -> CurationSession | None:
        async with self._session() as session:
            record = await session.get(CurationSessionRecord, session_id)
            payload = record.payload if record else None
        if payload is None:
            return None
        return _validate_all(CurationSession, [payload])[0]

    async def save_session(self, curation_session: CurationSession) -> None:
        async with self._session() as session:
            await session.merge(
                CurationSessionRecord(
                    id=curation_session.id,
                    curator_id=curation_session.curator_id,
                    started_at=curation_session.started_at,
                    payload=curation_session.to_document(),
                )
            )

    # =========================================================================
    # Works
    # =========================================================================

    async def get_work_by_id(self, agent_id: str, work_id: str) -> Work | None:
        async with self._session() as session:
            result = await session.execute(
                select(WorkRecord.payload).where(
                    WorkRecord.agent_id == agent_id,
                    WorkRecord.id == work_id,
                )
            )
            payload = result.scalar_one_or_none()
        if payload is None:
            return None
        return _validate_all(Work, [payload])[0]

    async def list_works(self, agent_id: str) -> list[Work]:
        async with self._session() as session:
            result = await session.execute(
                select(WorkRecord.payload)
                .where(WorkRecord.agent_id == agent_id)
                .order_by(WorkRecord.id)
            )
            payloads = result.scalars().all()
        return _validate_all(Work, payloads)

    async def save_work(self, agent_id: str, work: Work) -> None:
        async with self._session() as session:
            await session.merge(
                WorkRecord(id=work.id, agent_id=agent_id, payload=work.to_document())
            )

    # =========================================================================
    # Collaborations
    # =========================================================================

    async def list_collaborations(self) -> list[Collaboration]:
        async with self._session() as session:
            result = await session.execute(
                select(CollaborationRecord.payload).order_by(CollaborationRecord.pk)
            )
            payloads = result.scalars().all()
        return _validate_all(Collaboration, payloads)

    async def add_collaboration(self, collaboration: Collaboration) -> None:
        """Append a collaboration record.

        Args:
            collaboration: Collaboration to store.
        """
        async with self._session() as session:
            session.add(
                CollaborationRecord(
                    collaboration_id=collaboration.id,
                    payload=collaboration.to_document(),
                )
            )


def _validate_all(model: type, payloads: list[dict[str, Any]]) -> list:
    try:
        return [model.model_validate(payload) for payload in payloads]
    except ValidationError as e:
        raise StoreUnavailableError(f"Invalid {model.__name__} record in database", e) from e
