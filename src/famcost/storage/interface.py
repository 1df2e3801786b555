"""
Record store interface.

The store exclusively owns the canonical list of daily records. Callers read
snapshots, save whole records (one per date; saving replaces), and may
subscribe to be pushed a fresh snapshot after every save. Aggregation never
talks to a store directly; it is handed a snapshot.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
import logging
from typing import Optional

from famcost.model.record import DailyRecord

logger = logging.getLogger(__name__)

RecordListener = Callable[[list[DailyRecord]], None]


class StorageError(Exception):
    """Base exception for record store operations."""


class StoreCorruptedError(StorageError):
    """Stored data could not be read at all."""


class RecordStore(ABC):
    """Abstract record store.

    Implementations provide get_all_records, get_record and _write_record;
    save_record wraps the write and notifies subscribers.
    """

    def __init__(self) -> None:
        self._listeners: list[RecordListener] = []

    @abstractmethod
    def get_all_records(self) -> list[DailyRecord]:
        """All records, newest date first."""

    @abstractmethod
    def get_record(self, date: str) -> Optional[DailyRecord]:
        """The record for a date, or None."""

    @abstractmethod
    def _write_record(self, record: DailyRecord) -> None:
        """Insert or replace the record keyed by record.date."""

    def save_record(self, record: DailyRecord) -> None:
        """Insert or replace the record for record.date, then notify subscribers.

        Raises:
            StorageError: if the backend write fails
        """
        self._write_record(record)
        logger.debug("Saved record %s (id=%s)", record.date, record.id)
        self._notify()

    def subscribe(self, listener: RecordListener) -> Callable[[], None]:
        """Register a listener called with a snapshot after every save.

        The listener is also called once immediately with the current snapshot.
        Returns a function that removes the listener.
        """
        self._listeners.append(listener)
        listener(self.get_all_records())

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.get_all_records()
        for listener in list(self._listeners):
            listener(list(snapshot))


__all__ = [
    "RecordListener",
    "RecordStore",
    "StorageError",
    "StoreCorruptedError",
]
