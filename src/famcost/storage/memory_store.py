"""In-process record store (tests, previews)."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from famcost.model.record import DailyRecord

from .interface import RecordStore


class MemoryRecordStore(RecordStore):
    def __init__(self, records: Iterable[DailyRecord] = ()):
        super().__init__()
        self._by_date: dict[str, DailyRecord] = {}
        for record in records:
            self._by_date[record.date] = record

    def get_all_records(self) -> list[DailyRecord]:
        return sorted(self._by_date.values(), key=lambda r: r.date, reverse=True)

    def get_record(self, date: str) -> Optional[DailyRecord]:
        return self._by_date.get(date)

    def _write_record(self, record: DailyRecord) -> None:
        self._by_date[record.date] = record.model_copy(deep=True)
