# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the JSON file curation store."""

import json

import pytest

from eden_academy.domains.curation import CurationSession, StoreUnavailableError, Work


class TestJsonFileStoreReads:
    """Tests for reading the data directory."""

    @pytest.mark.asyncio
    async def test_missing_files_are_empty(self, json_store):
        """Test that absent files read as empty collections."""
        assert await json_store.list_sessions() == []
        assert await json_store.list_works("abraham") == []
        assert await json_store.list_collaborations() == []
        assert await json_store.get_work_by_id("abraham", "abraham_001") is None
        assert await json_store.get_session("missing") is None

    @pytest.mark.asyncio
    async def test_empty_file_is_empty(self, json_store, data_dir):
        """Test that a blank file reads as an empty collection."""
        path = data_dir / "curation" / "sessions.json"
        path.parent.mkdir(parents=True)
        path.write_text("  \n", encoding="utf-8")

        assert await json_store.list_sessions() == []

    @pytest.mark.asyncio
    async def test_reads_seeded_records(
        self, json_store, seed_data, make_session, make_decision, make_work
    ):
        """Test reading sessions and works from their files."""
        seed_data(
            sessions=[make_session("s1", decisions=[make_decision("abraham_001", "accept")])],
            works={"abraham": [make_work("abraham_001", quality=72, themes=["light"])]},
        )

        sessions = await json_store.list_sessions()
        work = await json_store.get_work_by_id("abraham", "abraham_001")

        assert [s.id for s in sessions] == ["s1"]
        assert sessions[0].decisions[0].agent_id == "abraham"
        assert work is not None
        assert work.quality_score == 72
        assert work.thumbnail == "https://cdn.example.com/abraham_001.png"

    @pytest.mark.asyncio
    async def test_work_lookup_uses_agent_partition(self, json_store, seed_data, make_work):
        """Test that works are only found in their agent's file."""
        seed_data(works={"abraham": [make_work("abraham_001")]})

        assert await json_store.get_work_by_id("solienne", "abraham_001") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("agent_id", ["", "..", "../curation/sessions", "a/b"])
    async def test_unsafe_agent_ids_read_nothing(self, json_store, agent_id):
        """Test that agent ids cannot escape the works directory."""
        assert await json_store.list_works(agent_id) == []

    @pytest.mark.asyncio
    async def test_malformed_json_raises(self, json_store, data_dir):
        """Test that invalid JSON is a store failure."""
        path = data_dir / "collaborations" / "collaborations.json"
        path.parent.mkdir(parents=True)
        path.write_text("[{", encoding="utf-8")

        with pytest.raises(StoreUnavailableError, match="Invalid JSON"):
            await json_store.list_collaborations()

    @pytest.mark.asyncio
    async def test_non_array_document_raises(self, json_store, seed_data):
        """Test that a file holding an object instead of a list is rejected."""
        seed_data(sessions={"id": "s1"})

        with pytest.raises(StoreUnavailableError, match="Expected a JSON array"):
            await json_store.list_sessions()

    @pytest.mark.asyncio
    async def test_invalid_record_raises(self, json_store, seed_data):
        """Test that a record failing validation is a store failure."""
        seed_data(sessions=[{"id": "s1", "curatorId": "nina"}])

        with pytest.raises(StoreUnavailableError) as exc_info:
            await json_store.list_sessions()

        assert exc_info.value.original_error is not None

    @pytest.mark.asyncio
    async def test_null_lists_read_as_empty(self, json_store, seed_data, make_session):
        """Test that explicit nulls in list fields read as empty lists."""
        session_doc = make_session("s1", workQueue=None)
        session_doc["decisions"] = None
        session_doc["collaborators"] = None
        seed_data(
            sessions=[session_doc],
            works={"abraham": [{"id": "abraham_001", "themes": None, "files": None}]},
            collaborations=[
                {"id": "c1", "participants": None, "decisions": [{"workId": "w", "votes": None}]},
            ],
        )

        (session,) = await json_store.list_sessions()
        work = await json_store.get_work_by_id("abraham", "abraham_001")
        (collaboration,) = await json_store.list_collaborations()

        assert session.work_queue == []
        assert session.decisions == []
        assert work is not None
        assert work.themes == []
        assert work.thumbnail is None
        assert collaboration.participants == []
        assert collaboration.decisions[0].votes == []


class TestJsonFileStoreWrites:
    """Tests for writing records."""

    @pytest.mark.asyncio
    async def test_save_session_creates_file(self, json_store, make_session):
        """Test saving into a data directory without a sessions file."""
        session = CurationSession.model_validate(make_session("s1"))

        await json_store.save_session(session)

        stored = json.loads(json_store.sessions_path.read_text(encoding="utf-8"))
        assert [s["id"] for s in stored] == ["s1"]
        assert "workQueue" in stored[0]
        assert not json_store.sessions_path.with_suffix(".json.tmp").exists()

    @pytest.mark.asyncio
    async def test_save_session_replaces_by_id(self, json_store, seed_data, make_session):
        """Test that saving an existing session replaces it in place."""
        seed_data(sessions=[make_session("s1"), make_session("s2")])
        session = await json_store.get_session("s1")
        session.title = "Renamed"

        await json_store.save_session(session)

        sessions = await json_store.list_sessions()
        assert [s.id for s in sessions] == ["s1", "s2"]
        assert sessions[0].title == "Renamed"

    @pytest.mark.asyncio
    async def test_unknown_keys_survive_round_trip(self, json_store, seed_data, make_session):
        """Test that fields this service does not model are preserved."""
        seed_data(sessions=[make_session("s1", exhibitionId="ex-9")])

        session = await json_store.get_session("s1")
        await json_store.save_session(session)

        stored = json.loads(json_store.sessions_path.read_text(encoding="utf-8"))
        assert stored[0]["exhibitionId"] == "ex-9"

    @pytest.mark.asyncio
    async def test_save_work_upserts(self, json_store, seed_data, make_work):
        """Test that saving a work updates its agent file."""
        seed_data(works={"abraham": [make_work("abraham_001"), make_work("abraham_002")]})
        work = await json_store.get_work_by_id("abraham", "abraham_002")
        work.curation = {"curated": True}

        await json_store.save_work("abraham", work)
        await json_store.save_work("abraham", Work(id="abraham_003"))

        works = await json_store.list_works("abraham")
        assert [w.id for w in works] == ["abraham_001", "abraham_002", "abraham_003"]
        assert works[1].curation == {"curated": True}

    @pytest.mark.asyncio
    async def test_save_work_rejects_unsafe_agent(self, json_store):
        """Test that writes outside the works directory are refused."""
        with pytest.raises(StoreUnavailableError):
            await json_store.save_work("../x", Work(id="x_001"))

    @pytest.mark.asyncio
    async def test_check_health(self, json_store):
        """Test health check on an empty data directory."""
        assert await json_store.check_health() is True
