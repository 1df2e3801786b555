"""
Record store kept as one JSON file: an array of record documents.

This is the on-device layout the tracker has always used in local mode, so
existing exports can be dropped in as data/records.json.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from famcost.model.record import DailyRecord
from famcost.model.record_io import dump_records_json, load_records_json

from .interface import RecordStore, StorageError, StoreCorruptedError

logger = logging.getLogger(__name__)


class JsonRecordStore(RecordStore):
    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)

    def get_all_records(self) -> list[DailyRecord]:
        if not self.path.exists():
            return []
        try:
            records = load_records_json(self.path.read_text(encoding="utf-8"))
        except ValueError as e:
            raise StoreCorruptedError(f"Cannot read record file {self.path}: {e}") from e
        # Last one wins if a hand-edited file repeats a date.
        by_date = {r.date: r for r in records}
        return sorted(by_date.values(), key=lambda r: r.date, reverse=True)

    def get_record(self, date: str) -> Optional[DailyRecord]:
        for record in self.get_all_records():
            if record.date == date:
                return record
        return None

    def _write_record(self, record: DailyRecord) -> None:
        records = [r for r in self.get_all_records() if r.date != record.date]
        records.append(record)
        text = dump_records_json(records)

        # Write to a sibling temp file first so a failed write keeps the old file.
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(text, encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Failed to write record file {self.path}: {e}") from e
        logger.debug("Wrote %d records to %s", len(records), self.path)
