"""
Repository selection.
"""
from __future__ import annotations

import logging

from newslens.errors import StorageUnavailableError
from newslens.settings import Settings
from newslens.storage.base import Repository
from newslens.storage.memory import MemoryRepository
from newslens.storage.sql import SqlRepository

logger = logging.getLogger(__name__)


def create_repository(settings: Settings) -> Repository:
    """
    Build the configured repository.

    STORAGE_BACKEND="memory" always yields the in-memory store. Otherwise the
    SQL store is opened, and if it cannot be reached the in-memory store is
    used instead so the pipeline keeps working.
    """
    if settings.STORAGE_BACKEND.lower() == "memory":
        return MemoryRepository()

    try:
        return SqlRepository(settings.DATABASE_URL)
    except StorageUnavailableError as e:
        logger.warning("Primary store unavailable, using in-memory store: %s", e)
        return MemoryRepository()
