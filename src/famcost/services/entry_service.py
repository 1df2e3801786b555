from __future__ import annotations

"""
Entry Service - building and editing the record for one day.

This is the validation boundary for record creation: user-entered dates and
amounts are parsed and rejected here, so records reaching the store (and the
aggregation functions) are always well formed.

Flow:
    draft = start_draft(records, "2026-02-10", units)   # auto-loads an existing day
    set_unit_values(draft, "Car", income=3000, cost=200)
    add_bazar_item(draft, "Rice", 450)
    record = finalize(draft)                              # drops all-zero unit logs
    store.save_record(record)
"""

from dataclasses import dataclass
from datetime import date as Date
import logging
from typing import Optional, Sequence

from famcost.model.record import (
    ISO_DATE_PATTERN,
    BazarItem,
    DailyRecord,
    OtherItem,
    UnitLog,
    generate_id,
)

logger = logging.getLogger(__name__)


class EntryError(ValueError):
    """Rejected user input for a daily entry."""


@dataclass
class EntryDraft:
    """A record being edited. is_update is True when it was loaded from an existing day."""
    record: DailyRecord
    is_update: bool = False


def parse_entry_date(text: str) -> str:
    """Validate a user-entered date; only zero-padded YYYY-MM-DD is accepted."""
    value = (text or "").strip()
    if not ISO_DATE_PATTERN.match(value):
        raise EntryError(f"Date must be YYYY-MM-DD: {text!r}")
    try:
        Date.fromisoformat(value)
    except ValueError as e:
        raise EntryError(f"Not a calendar date: {text!r}") from e
    return value


def parse_amount(text: Optional[str]) -> float:
    """Parse a user-entered amount. Blank means 0; negative or non-numeric is rejected."""
    if text is None or not str(text).strip():
        return 0.0
    raw = str(text).strip().replace(",", "")
    try:
        value = float(raw)
    except ValueError as e:
        raise EntryError(f"Not a number: {text!r}") from e
    if value != value or value in (float("inf"), float("-inf")):
        raise EntryError(f"Not a finite number: {text!r}")
    if value < 0:
        raise EntryError(f"Amount cannot be negative: {text!r}")
    return value


def _zero_log(unit_name: str) -> UnitLog:
    return UnitLog(unit_id=unit_name, unit_name=unit_name, income=0, cost=0)


def start_draft(
    records: Sequence[DailyRecord],
    date: str,
    units: Sequence[str],
    editing: Optional[DailyRecord] = None,
) -> EntryDraft:
    """Start editing the day `date`.

    If `editing` is given, or a record already exists for the date, its values
    are loaded: every configured unit gets its existing log or a zero log, and
    items are carried over. Otherwise every configured unit starts at zero.
    Logs for unit names outside the configuration are kept as they are.
    """
    day = parse_entry_date(date)
    existing = editing or next((r for r in records if r.date == day), None)

    if existing is None:
        record = DailyRecord(date=day, unit_logs=[_zero_log(u) for u in units])
        return EntryDraft(record=record, is_update=False)

    configured = set(units)
    logs = []
    for unit in units:
        found = existing.find_unit_log(unit)
        logs.append(found.model_copy() if found else _zero_log(unit))
    extra = [log.model_copy() for log in existing.unit_logs if log.unit_name not in configured]
    if extra:
        logger.warning(
            "Record %s has entries for unconfigured units: %s",
            existing.date,
            ", ".join(sorted({log.unit_name for log in extra})),
        )

    record = existing.model_copy(
        deep=True,
        update={"date": day, "unit_logs": logs + extra},
    )
    return EntryDraft(record=record, is_update=True)


def set_unit_values(
    draft: EntryDraft,
    unit_name: str,
    income: Optional[float] = None,
    cost: Optional[float] = None,
) -> None:
    """Overwrite one unit's income and/or cost in the draft."""
    log = draft.record.find_unit_log(unit_name)
    if log is None:
        raise EntryError(f"Unknown unit: {unit_name}")
    for name, value in (("income", income), ("cost", cost)):
        if value is None:
            continue
        if value < 0:
            raise EntryError(f"{name.capitalize()} cannot be negative for {unit_name}")
        setattr(log, name, float(value))


def _new_item(cls, name: str, price: Optional[float]):
    name = (name or "").strip()
    if not name:
        raise EntryError("Item name is required")
    if price is None:
        raise EntryError(f"Price is required for {name}")
    if price < 0:
        raise EntryError(f"Price cannot be negative for {name}")
    return cls(id=generate_id(), name=name, price=float(price))


def add_bazar_item(draft: EntryDraft, name: str, price: Optional[float]) -> BazarItem:
    item = _new_item(BazarItem, name, price)
    draft.record.bazar_items.append(item)
    return item


def add_other_item(draft: EntryDraft, name: str, price: Optional[float]) -> OtherItem:
    item = _new_item(OtherItem, name, price)
    draft.record.other_items.append(item)
    return item


def remove_item(draft: EntryDraft, item_id: str) -> bool:
    """Remove a bazar or other item by id. Returns False when no item matched."""
    record = draft.record
    before = len(record.bazar_items) + len(record.other_items)
    record.bazar_items = [i for i in record.bazar_items if i.id != item_id]
    record.other_items = [i for i in record.other_items if i.id != item_id]
    return len(record.bazar_items) + len(record.other_items) < before


def set_building_income(draft: EntryDraft, amount: float) -> None:
    if amount < 0:
        raise EntryError("Building income cannot be negative")
    draft.record.building_income = float(amount)


def finalize(draft: EntryDraft) -> DailyRecord:
    """The record to persist: unit logs with zero income and zero cost are dropped.

    An updated day keeps the id it was stored under.
    """
    record = draft.record
    kept = [log.model_copy() for log in record.unit_logs if not log.is_empty]
    return DailyRecord.model_validate(
        record.model_copy(deep=True, update={"unit_logs": kept}).to_document()
    )


__all__ = [
    "EntryDraft",
    "EntryError",
    "add_bazar_item",
    "add_other_item",
    "finalize",
    "parse_amount",
    "parse_entry_date",
    "remove_item",
    "set_building_income",
    "set_unit_values",
    "start_draft",
]
