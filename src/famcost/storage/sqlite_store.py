"""
Record store implementation using SQLite.

One row per calendar date; the full record document is kept as JSON so the
stored shape stays the camelCase document shape. Saving a record for a date
that already has one replaces the row.

Privacy: local-only SQLite file. No network I/O.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Optional

from famcost.model.record import DailyRecord
from famcost.model.record_io import records_from_documents

from .interface import RecordStore, StorageError, StoreCorruptedError

logger = logging.getLogger(__name__)


class SqliteRecordStore(RecordStore):
    """Date-keyed record store backed by a SQLite file.

    Usage:
        store = SqliteRecordStore("data/records.db")
        store.save_record(record)
        records = store.get_all_records()

    Raises StoreCorruptedError when the file cannot be read as a database.
    """

    def __init__(self, db_path: str | Path):
        """Initialize the store, creating the database file and schema if needed.

        Args:
            db_path: Path to SQLite database file
        """
        super().__init__()
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        try:
            return sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StoreCorruptedError(f"Cannot open record database {self.db_path}: {e}") from e

    def _unreadable(self, e: sqlite3.Error) -> StoreCorruptedError:
        return StoreCorruptedError(f"Cannot read record database {self.db_path}: {e}")

    def _init_schema(self) -> None:
        conn = self._connect()
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS daily_records (
                    record_date TEXT PRIMARY KEY,
                    record_id TEXT NOT NULL,
                    document TEXT NOT NULL,
                    updated_at TEXT DEFAULT (datetime('now'))
                )
            """)
            conn.commit()
        except sqlite3.Error as e:
            raise self._unreadable(e) from e
        finally:
            conn.close()

    def _write_record(self, record: DailyRecord) -> None:
        conn = self._connect()
        try:
            conn.execute(
                """
                INSERT INTO daily_records (record_date, record_id, document)
                VALUES (?, ?, ?)
                ON CONFLICT(record_date) DO UPDATE SET
                    record_id = excluded.record_id,
                    document = excluded.document,
                    updated_at = datetime('now')
            """,
                (record.date, record.id, json.dumps(record.to_document())),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to save record for {record.date}: {e}") from e
        finally:
            conn.close()

    def get_all_records(self) -> list[DailyRecord]:
        conn = self._connect()
        try:
            cursor = conn.execute(
                "SELECT document FROM daily_records ORDER BY record_date DESC"
            )
            docs = [self._decode(doc) for (doc,) in cursor.fetchall()]
        except sqlite3.Error as e:
            raise self._unreadable(e) from e
        finally:
            conn.close()
        return records_from_documents(d for d in docs if d is not None)

    def get_record(self, date: str) -> Optional[DailyRecord]:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT document FROM daily_records WHERE record_date = ?", (date,)
            ).fetchone()
        except sqlite3.Error as e:
            raise self._unreadable(e) from e
        finally:
            conn.close()
        if row is None:
            return None
        doc = self._decode(row[0])
        if doc is None:
            return None
        records = records_from_documents([doc])
        return records[0] if records else None

    def count(self) -> int:
        conn = self._connect()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM daily_records").fetchone()
        except sqlite3.Error as e:
            raise self._unreadable(e) from e
        finally:
            conn.close()
        return int(n)

    @staticmethod
    def _decode(document: str) -> Optional[dict]:
        try:
            return json.loads(document)
        except json.JSONDecodeError:
            logger.warning("Skipping undecodable record row")
            return None
