# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Curation stores.

Two interchangeable backends implement the CurationStore contract:
- JsonFileStore: the academy's flat-file data directory
- DatabaseStore: SQLAlchemy async tables

Usage:
    from eden_academy.infrastructure.storage import open_store

    store = await open_store(settings)
    sessions = await store.list_sessions()
    await store.close()
"""

from typing import TYPE_CHECKING

from eden_academy.infrastructure.storage.base import CurationStore
from eden_academy.infrastructure.storage.database import DatabaseStore
from eden_academy.infrastructure.storage.json_store import JsonFileStore

if TYPE_CHECKING:
    from eden_academy.core.config.settings import Settings


async def open_store(settings: "Settings") -> CurationStore:
    """Create the store selected by the storage settings.

    Args:
        settings: Application settings.

    Returns:
        A ready-to-use curation store.

    Raises:
        StoreUnavailableError: If the database backend cannot be initialized.
    """
    if settings.storage.backend == "database":
        store = DatabaseStore(
            settings.storage.database_url,
            echo=settings.storage.echo,
        )
        await store.init()
        return store

    return JsonFileStore(settings.storage.data_dir)


__all__ = [
    "CurationStore",
    "DatabaseStore",
    "JsonFileStore",
    "open_store",
]
