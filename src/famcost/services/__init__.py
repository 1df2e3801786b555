"""
Service layer for the tracker.

Functional core: aggregation and entry editing take plain data in and return
plain data out. No UI framework imports (Rich, Typer) and no store access;
callers pass record snapshots in.
"""

from famcost.services.aggregation_service import (
    Dashboard,
    DayAmount,
    DaySummary,
    MonthlyTotals,
    TodayTotals,
    UnitHistoryPoint,
    UnitTotals,
    build_dashboard,
)
from famcost.services.entry_service import EntryDraft, EntryError

__all__ = [
    "Dashboard",
    "DayAmount",
    "DaySummary",
    "EntryDraft",
    "EntryError",
    "MonthlyTotals",
    "TodayTotals",
    "UnitHistoryPoint",
    "UnitTotals",
    "build_dashboard",
]
