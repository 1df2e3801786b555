"""
Record stores.

open_record_store() picks the backend named in the tracker settings; every
backend implements the same narrow RecordStore interface.
"""

from __future__ import annotations

from famcost.config import StoreBackend, TrackerSettings
from famcost.workspace import Workspace

from .interface import RecordListener, RecordStore, StorageError, StoreCorruptedError
from .json_store import JsonRecordStore
from .memory_store import MemoryRecordStore
from .sqlite_store import SqliteRecordStore


def open_record_store(settings: TrackerSettings, workspace: Workspace) -> RecordStore:
    """Open the record store configured for this workspace."""
    if settings.backend == StoreBackend.json:
        return JsonRecordStore(workspace.json_store_path)
    return SqliteRecordStore(workspace.sqlite_store_path)


__all__ = [
    "JsonRecordStore",
    "MemoryRecordStore",
    "RecordListener",
    "RecordStore",
    "SqliteRecordStore",
    "StorageError",
    "StoreCorruptedError",
    "open_record_store",
]
