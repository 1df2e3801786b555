from __future__ import annotations

"""
Canonical data models for daily records.

Scope
- Pure Pydantic v2 models; no I/O.
- Field aliases mirror the persisted document shape (camelCase), so
  model_dump(by_alias=True) yields exactly what the record store keeps.
- Optional fields carry explicit defaults: missing amounts are 0, missing
  item lists are empty.

Invariants enforced here:
- date is a real calendar date written as zero-padded YYYY-MM-DD, so lexical
  ordering of date strings equals chronological ordering.
- amounts are non-negative.
"""

from datetime import date as Date
import re
from typing import Any, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def generate_id() -> str:
    """Short random identifier for records and items."""
    return uuid4().hex[:9]


def _missing_to_zero(value: Any) -> Any:
    if value is None or value == "":
        return 0.0
    return value


class _DocumentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class UnitLog(_DocumentModel):
    """Income and cost of one unit on one day."""

    unit_id: str = Field(alias="unitId")
    unit_name: str = Field(alias="unitName", min_length=1)
    income: float = Field(default=0.0, ge=0)
    cost: float = Field(default=0.0, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _default_unit_id(cls, data: Any) -> Any:
        # Unit ids have always been the unit name; older documents may omit them.
        if isinstance(data, dict):
            name = data.get("unitName", data.get("unit_name"))
            if name is not None and not (data.get("unitId") or data.get("unit_id")):
                data = {**data, "unitId": name}
        return data

    @field_validator("income", "cost", mode="before")
    @classmethod
    def _default_amount(cls, value: Any) -> Any:
        return _missing_to_zero(value)

    @property
    def is_empty(self) -> bool:
        return self.income == 0 and self.cost == 0

    @property
    def net(self) -> float:
        return self.income - self.cost


class BazarItem(_DocumentModel):
    """A household purchase ("bazar" item)."""

    id: str = Field(default_factory=generate_id)
    name: str = ""
    price: float = Field(default=0.0, ge=0)

    @field_validator("price", mode="before")
    @classmethod
    def _default_price(cls, value: Any) -> Any:
        return _missing_to_zero(value)


class OtherItem(BazarItem):
    """A miscellaneous daily expense, kept apart from bazar items."""


class DailyRecord(_DocumentModel):
    """Everything recorded for one calendar day. Unique per date."""

    id: str = Field(default_factory=generate_id)
    date: str
    unit_logs: list[UnitLog] = Field(default_factory=list, alias="unitLogs")
    bazar_items: list[BazarItem] = Field(default_factory=list, alias="bazarItems")
    other_items: list[OtherItem] = Field(default_factory=list, alias="otherItems")
    building_income: float = Field(default=0.0, ge=0, alias="buildingIncome")

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, value: Any) -> Any:
        if isinstance(value, Date):
            return value.isoformat()
        return value

    @field_validator("date")
    @classmethod
    def _validate_date(cls, value: str) -> str:
        if not ISO_DATE_PATTERN.match(value):
            raise ValueError(f"Date must be zero-padded YYYY-MM-DD: {value!r}")
        try:
            Date.fromisoformat(value)
        except ValueError as e:
            raise ValueError(f"Not a calendar date: {value!r}") from e
        return value

    @field_validator("unit_logs", "bazar_items", "other_items", mode="before")
    @classmethod
    def _default_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("building_income", mode="before")
    @classmethod
    def _default_building_income(cls, value: Any) -> Any:
        return _missing_to_zero(value)

    @property
    def day(self) -> Date:
        return Date.fromisoformat(self.date)

    def in_period(self, year: Optional[int] = None, month: Optional[int] = None) -> bool:
        """True when the record falls in the given year and/or month."""
        d = self.day
        if year is not None and d.year != year:
            return False
        if month is not None and d.month != month:
            return False
        return True

    def find_unit_log(self, unit_name: str) -> Optional[UnitLog]:
        """First log whose unit name matches exactly, or None."""
        for log in self.unit_logs:
            if log.unit_name == unit_name:
                return log
        return None

    @property
    def unit_income(self) -> float:
        return float(sum(u.income for u in self.unit_logs))

    @property
    def unit_cost(self) -> float:
        return float(sum(u.cost for u in self.unit_logs))

    @property
    def bazar_total(self) -> float:
        return float(sum(b.price for b in self.bazar_items))

    @property
    def other_total(self) -> float:
        return float(sum(o.price for o in self.other_items))

    def to_document(self) -> dict[str, Any]:
        """Persisted document shape (camelCase keys)."""
        return self.model_dump(mode="json", by_alias=True)


__all__ = [
    "BazarItem",
    "DailyRecord",
    "ISO_DATE_PATTERN",
    "OtherItem",
    "UnitLog",
    "generate_id",
]
