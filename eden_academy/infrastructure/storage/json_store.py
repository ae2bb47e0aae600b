# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""JSON file curation store.

Reads and writes the academy's flat-file layout:

    {data_dir}/curation/sessions.json             list of sessions
    {data_dir}/works/{agentId}.json               list of works per agent
    {data_dir}/collaborations/collaborations.json list of collaborations

A missing file is an empty collection. Unreadable files, invalid JSON and
records that fail validation raise StoreUnavailableError.

Example:
    >>> store = JsonFileStore(Path("data"))
    >>> sessions = await store.list_sessions()
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from eden_academy.domains.curation.exceptions import StoreUnavailableError
from eden_academy.domains.curation.models import Collaboration, CurationSession, Work
from eden_academy.infrastructure.storage.base import CurationStore

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class JsonFileStore(CurationStore):
    """Curation store backed by JSON files on disk.

    File access runs in a worker thread so request handlers are not
    blocked by disk I/O.

    Attributes:
        data_dir: Root directory of the data files.
    """

    backend_name = "json"

    def __init__(self, data_dir: Path | str) -> None:
        """Initialize the store.

        Args:
            data_dir: Root directory of the data files.
        """
        self.data_dir = Path(data_dir)

    @property
    def sessions_path(self) -> Path:
        """Path of the sessions file."""
        return self.data_dir / "curation" / "sessions.json"

    @property
    def collaborations_path(self) -> Path:
        """Path of the collaborations file."""
        return self.data_dir / "collaborations" / "collaborations.json"

    def works_path(self, agent_id: str) -> Path | None:
        """Path of an agent's works file, None for unusable agent ids."""
        if not agent_id or agent_id in (".", "..") or "/" in agent_id or "\\" in agent_id:
            return None
        return self.data_dir / "works" / f"{agent_id}.json"

    # =========================================================================
    # Sessions
    # =========================================================================

    async def list_sessions(self) -> list[CurationSession]:
        return await asyncio.to_thread(self._load, self.sessions_path, CurationSession)

    async def save_session(self, session: CurationSession) -> None:
        await asyncio.to_thread(self._upsert, self.sessions_path, session)
        logger.debug("Saved session %s to %s", session.id, self.sessions_path)

    # =========================================================================
    # Works
    # =========================================================================

    async def get_work_by_id(self, agent_id: str, work_id: str) -> Work | None:
        for work in await self.list_works(agent_id):
            if work.id == work_id:
                return work
        return None

    async def list_works(self, agent_id: str) -> list[Work]:
        path = self.works_path(agent_id)
        if path is None:
            return []
        return await asyncio.to_thread(self._load, path, Work)

    async def save_work(self, agent_id: str, work: Work) -> None:
        path = self.works_path(agent_id)
        if path is None:
            raise StoreUnavailableError(
                "Invalid agent partition",
                details={"agent_id": agent_id},
            )
        await asyncio.to_thread(self._upsert, path, work)

    # =========================================================================
    # Collaborations
    # =========================================================================

    async def list_collaborations(self) -> list[Collaboration]:
        return await asyncio.to_thread(self._load, self.collaborations_path, Collaboration)

    # =========================================================================
    # File helpers
    # =========================================================================

    def _read_documents(self, path: Path) -> list[dict[str, Any]]:
        if not path.exists():
            return []

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise StoreUnavailableError(f"Cannot read {path}", e) from e

        if not content.strip():
            return []

        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as e:
            raise StoreUnavailableError(f"Invalid JSON in {path}", e) from e

        if not isinstance(parsed, list):
            raise StoreUnavailableError(
                f"Expected a JSON array in {path}, got {type(parsed).__name__}"
            )
        return parsed

    def _load(self, path: Path, model: type[ModelT]) -> list[ModelT]:
        documents = self._read_documents(path)
        try:
            return [model.model_validate(doc) for doc in documents]
        except ValidationError as e:
            raise StoreUnavailableError(f"Invalid record in {path}", e) from e

    def _upsert(self, path: Path, record: CurationSession | Work) -> None:
        documents = self._read_documents(path)
        document = record.to_document()

        for index, existing in enumerate(documents):
            if isinstance(existing, dict) and existing.get("id") == record.id:
                documents[index] = document
                break
        else:
            documents.append(document)

        self._write_documents(path, documents)

    def _write_documents(self, path: Path, documents: list[dict[str, Any]]) -> None:
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(documents, indent=2), encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            raise StoreUnavailableError(f"Cannot write {path}", e) from e
