from __future__ import annotations

"""
Record document <-> model conversion (pure text, no disk I/O).

Stored documents use the camelCase shape:

  { id, date, unitLogs: [{unitId, unitName, income, cost}],
    bazarItems: [{id, name, price}], otherItems: [...], buildingIncome }

- Backward compatible with older documents that predate otherItems and
  buildingIncome; those load with their defaults.
- Amounts that are negative or not numbers (older entry forms accepted them)
  are read as 0 and logged, so the rest of that day still counts.
- Documents that still fail validation are skipped and logged, so one bad day
  never hides the rest of the history.
"""

from collections.abc import Iterable
import json
import logging
import math
from typing import Any, Optional

from pydantic import ValidationError

from .record import DailyRecord

logger = logging.getLogger(__name__)

# Amount fields per item list in the stored document shape.
_AMOUNT_FIELDS = {
    "unitLogs": ("income", "cost"),
    "bazarItems": ("price",),
    "otherItems": ("price",),
}


def record_from_document(doc: dict[str, Any]) -> DailyRecord:
    """Validate one stored document. Raises pydantic.ValidationError."""
    return DailyRecord.model_validate(doc)


def _coerce_amount(value: Any) -> Any:
    if value is None or value == "":
        return value
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(amount) or amount < 0:
        return 0.0
    return value


def _coerce_amounts(doc: dict[str, Any]) -> tuple[dict[str, Any], int]:
    """Copy of a stored document with unusable amounts replaced by 0, and how many were replaced."""
    fixed = dict(doc)
    replaced = 0
    if "buildingIncome" in doc:
        fixed["buildingIncome"] = _coerce_amount(doc["buildingIncome"])
        if fixed["buildingIncome"] is not doc["buildingIncome"]:
            replaced += 1
    for key, fields in _AMOUNT_FIELDS.items():
        entries = doc.get(key)
        if not isinstance(entries, list):
            continue
        fixed_entries = []
        for entry in entries:
            if isinstance(entry, dict):
                entry = dict(entry)
                for field in fields:
                    if field in entry:
                        value = _coerce_amount(entry[field])
                        if value is not entry[field]:
                            replaced += 1
                            entry[field] = value
            fixed_entries.append(entry)
        fixed[key] = fixed_entries
    return fixed, replaced


def _salvage(doc: dict[str, Any]) -> Optional[DailyRecord]:
    fixed, replaced = _coerce_amounts(doc)
    try:
        record = record_from_document(fixed)
    except ValidationError as e:
        logger.warning(
            "Skipping invalid record document (date=%r): %s",
            doc.get("date"),
            e.errors(include_url=False),
        )
        return None
    logger.warning(
        "Read %d invalid amount(s) as 0 in record document (date=%r)",
        replaced,
        doc.get("date"),
    )
    return record


def records_from_documents(docs: Iterable[Any]) -> list[DailyRecord]:
    """Validate many documents, repairing bad amounts and skipping (and logging) the rest."""
    records: list[DailyRecord] = []
    for doc in docs:
        if not isinstance(doc, dict):
            logger.warning("Skipping non-object record document: %r", doc)
            continue
        try:
            records.append(record_from_document(doc))
        except ValidationError:
            record = _salvage(doc)
            if record is not None:
                records.append(record)
    return records


def dump_records_json(records: Iterable[DailyRecord]) -> str:
    """Serialize records as a JSON array of documents, newest date first."""
    ordered = sorted(records, key=lambda r: r.date, reverse=True)
    return json.dumps([r.to_document() for r in ordered], indent=2, ensure_ascii=False)


def load_records_json(text: str) -> list[DailyRecord]:
    """Parse a JSON array of documents. Raises ValueError if the text is not an array."""
    if not text.strip():
        return []
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("Record file must contain a JSON array of documents")
    return records_from_documents(data)


__all__ = [
    "dump_records_json",
    "load_records_json",
    "record_from_document",
    "records_from_documents",
]
