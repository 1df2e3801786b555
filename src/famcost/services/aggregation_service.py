from __future__ import annotations

"""
Aggregation Service - daily, monthly and per-unit statistics.

Pure functions over a snapshot of DailyRecord objects: no I/O, no hidden
state, and no clock reads except resolve_today(), which takes the zone (and
optionally "now") explicitly. Identical inputs always give identical outputs.

Conventions
- Input order is never assumed; anything ordered is sorted here.
- Dates are zero-padded ISO strings, so string order is chronological order.
- Unit attribution is exact string equality on unit name. Names that match no
  configured unit are reported by unmatched_unit_names(), never re-attributed.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone as dt_timezone
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo

from famcost.model.record import DailyRecord


@dataclass(frozen=True)
class TodayTotals:
    """Income and cost for a single day."""
    date: str
    income: float = 0.0
    cost: float = 0.0

    @property
    def balance(self) -> float:
        return self.income - self.cost


@dataclass(frozen=True)
class MonthlyTotals:
    """Totals for one calendar month."""
    year: int
    month: int
    income: float  # unit income + building income
    cost: float  # unit cost + bazar + other
    balance: float
    unit_income: float
    unit_cost: float
    bazar: float
    other: float
    building_income: float
    record_count: int


@dataclass(frozen=True)
class UnitTotals:
    """Income, cost and net of one unit over a set of records."""
    unit_name: str
    income: float
    cost: float
    net: float


@dataclass(frozen=True)
class DayAmount:
    date: str
    total: float


@dataclass(frozen=True)
class UnitHistoryPoint:
    date: str
    income: float
    cost: float
    net: float


@dataclass(frozen=True)
class DaySummary:
    """One day's in/out figures, as listed in the history view."""
    date: str
    record_id: str
    income: float  # unit income + building income
    cost: float  # unit cost + bazar + other
    balance: float
    bazar: float
    other: float


@dataclass(frozen=True)
class Dashboard:
    """Everything the stats view shows, computed in one pass."""
    today: TodayTotals
    month: MonthlyTotals
    units: List[UnitTotals] = field(default_factory=list)
    bazar_by_date: List[DayAmount] = field(default_factory=list)
    unmatched_units: List[str] = field(default_factory=list)


def resolve_today(zone: str | ZoneInfo, now: Optional[datetime] = None) -> str:
    """Calendar date (YYYY-MM-DD) in the given zone.

    A naive `now` is taken to be UTC. Host locale never enters into it.
    """
    tz = zone if isinstance(zone, ZoneInfo) else ZoneInfo(zone)
    if now is None:
        now = datetime.now(dt_timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=dt_timezone.utc)
    return now.astimezone(tz).date().isoformat()


def current_period(zone: str | ZoneInfo, now: Optional[datetime] = None) -> Tuple[int, int]:
    """(year, month) containing today in the given zone."""
    today = resolve_today(zone, now)
    return int(today[:4]), int(today[5:7])


def _chronological(records: Iterable[DailyRecord]) -> List[DailyRecord]:
    return sorted(records, key=lambda r: r.date)


def filter_period(
    records: Iterable[DailyRecord],
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> List[DailyRecord]:
    """Records in the given year and/or month, oldest first. None means no filter."""
    return [r for r in _chronological(records) if r.in_period(year, month)]


def today_totals(records: Sequence[DailyRecord], today: str) -> TodayTotals:
    """Totals for the record dated `today`; zeros when there is none.

    Income is unit income only. Cost is unit cost plus bazar and other items.
    """
    record = next((r for r in records if r.date == today), None)
    if record is None:
        return TodayTotals(date=today)
    return TodayTotals(
        date=today,
        income=record.unit_income,
        cost=record.unit_cost + record.bazar_total + record.other_total,
    )


def monthly_totals(records: Sequence[DailyRecord], year: int, month: int) -> MonthlyTotals:
    """Totals over the records of one month."""
    selected = filter_period(records, year, month)

    unit_income = sum(r.unit_income for r in selected)
    unit_cost = sum(r.unit_cost for r in selected)
    bazar = sum(r.bazar_total for r in selected)
    other = sum(r.other_total for r in selected)
    building_income = sum(r.building_income for r in selected)

    income = float(unit_income + building_income)
    cost = float(unit_cost + bazar + other)

    return MonthlyTotals(
        year=year,
        month=month,
        income=income,
        cost=cost,
        balance=income - cost,
        unit_income=float(unit_income),
        unit_cost=float(unit_cost),
        bazar=float(bazar),
        other=float(other),
        building_income=float(building_income),
        record_count=len(selected),
    )


def unit_totals(
    records: Sequence[DailyRecord],
    unit_name: str,
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> UnitTotals:
    """Totals for one unit, lifetime or restricted to a period."""
    income = 0.0
    cost = 0.0
    for record in filter_period(records, year, month):
        log = record.find_unit_log(unit_name)
        if log is None:
            continue
        income += log.income
        cost += log.cost
    return UnitTotals(unit_name=unit_name, income=income, cost=cost, net=income - cost)


def all_unit_totals(
    records: Sequence[DailyRecord],
    units: Sequence[str],
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> List[UnitTotals]:
    """unit_totals for every configured unit, in configuration order."""
    return [unit_totals(records, u, year, month) for u in units]


def bazar_by_date(records: Sequence[DailyRecord]) -> List[DayAmount]:
    """Total bazar spend per day with purchases, most recent day first."""
    days = [
        DayAmount(date=r.date, total=r.bazar_total)
        for r in records
        if r.bazar_items
    ]
    return sorted(days, key=lambda d: d.date, reverse=True)


def unit_history(
    records: Sequence[DailyRecord],
    unit_name: str,
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> List[UnitHistoryPoint]:
    """Per-day figures for one unit, oldest first. Days without an entry are omitted."""
    points = []
    for record in filter_period(records, year, month):
        log = record.find_unit_log(unit_name)
        if log is None:
            continue
        points.append(
            UnitHistoryPoint(date=record.date, income=log.income, cost=log.cost, net=log.net)
        )
    return points


def day_summaries(
    records: Sequence[DailyRecord],
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> List[DaySummary]:
    """Per-day in/out/balance, newest first.

    Day income includes building income so a month's day balances add up to
    the monthly balance.
    """
    summaries = []
    for record in filter_period(records, year, month):
        income = record.unit_income + record.building_income
        cost = record.unit_cost + record.bazar_total + record.other_total
        summaries.append(
            DaySummary(
                date=record.date,
                record_id=record.id,
                income=income,
                cost=cost,
                balance=income - cost,
                bazar=record.bazar_total,
                other=record.other_total,
            )
        )
    summaries.reverse()
    return summaries


def unmatched_unit_names(records: Sequence[DailyRecord], units: Sequence[str]) -> List[str]:
    """Unit names used in records that match no configured unit (e.g. after a rename)."""
    known = set(units)
    seen = {log.unit_name for r in records for log in r.unit_logs}
    return sorted(seen - known)


def build_dashboard(
    records: Sequence[DailyRecord],
    units: Sequence[str],
    today: str,
    year: int,
    month: int,
) -> Dashboard:
    """Stats view in one call: today, the selected month, units for that month, bazar days."""
    return Dashboard(
        today=today_totals(records, today),
        month=monthly_totals(records, year, month),
        units=all_unit_totals(records, units, year, month),
        bazar_by_date=bazar_by_date(records),
        unmatched_units=unmatched_unit_names(records, units),
    )


__all__ = [
    "Dashboard",
    "DayAmount",
    "DaySummary",
    "MonthlyTotals",
    "TodayTotals",
    "UnitHistoryPoint",
    "UnitTotals",
    "all_unit_totals",
    "bazar_by_date",
    "build_dashboard",
    "current_period",
    "day_summaries",
    "filter_period",
    "monthly_totals",
    "resolve_today",
    "today_totals",
    "unit_history",
    "unit_totals",
    "unmatched_unit_names",
]
