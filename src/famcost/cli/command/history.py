from __future__ import annotations

"""
History view: the records of one month, newest first.
"""

from datetime import datetime
from typing import Optional

from rich.table import Table
from rich.text import Text

from famcost.model.record import DailyRecord
from famcost.services.aggregation_service import current_period, day_summaries
from famcost.storage import StorageError
from famcost.workspace import Workspace

from .util import console, escape, fmt_amount, month_label, open_tracker, validate_period


def run(
    *,
    workspace: Workspace,
    year: Optional[int] = None,
    month: Optional[int] = None,
    detail: bool = False,
    limit: Optional[int] = None,
    now: Optional[datetime] = None,
) -> int:
    """List the month's records with In/Out/Balance per day.

    With detail=True every day's unit entries and items are listed too.
    """
    if not validate_period(year, month):
        return 1

    opened = open_tracker(workspace)
    if opened is None:
        return 1
    settings, store = opened

    this_year, this_month = current_period(settings.zone, now)
    the_year = year or this_year
    the_month = month or this_month

    try:
        records = store.get_all_records()
    except StorageError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        return 1

    days = day_summaries(records, the_year, the_month)
    label = month_label(the_year, the_month)
    console.print(f"[dim]{len(days)} records found for {label}[/dim]")
    if not days:
        return 0

    if limit is not None:
        days = days[:limit]

    by_date = {r.date: r for r in records}
    table = Table(title=f"History: {label} ({settings.currency})", show_lines=detail)
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Day", style="white")
    table.add_column("In", justify="right")
    table.add_column("Out", justify="right")
    table.add_column("Balance", justify="right")
    if detail:
        table.add_column("Entries", style="dim")

    for d in days:
        row = [
            d.date,
            by_date[d.date].day.strftime("%A"),
            fmt_amount(d.income),
            fmt_amount(-d.cost),
            fmt_amount(d.balance),
        ]
        if detail:
            row.append(_describe_entries(by_date[d.date]))
        table.add_row(*row)

    table.add_row("", "", Text(""), Text(""), Text(""), *([""] if detail else []))
    table.add_row(
        "",
        Text("Total", style="bold"),
        fmt_amount(sum(d.income for d in days)),
        fmt_amount(-sum(d.cost for d in days)),
        fmt_amount(sum(d.balance for d in days)),
        *([""] if detail else []),
    )
    console.print(table)
    return 0


def _describe_entries(record: DailyRecord) -> Text:
    lines = []
    for log in record.unit_logs:
        lines.append(f"{log.unit_name}: +{log.income:,.0f} / -{log.cost:,.0f}")
    for item in record.bazar_items:
        lines.append(f"Bazar {item.name}: {item.price:,.0f} [{item.id}]")
    for item in record.other_items:
        lines.append(f"Other {item.name}: {item.price:,.0f} [{item.id}]")
    if record.building_income:
        lines.append(f"Building: +{record.building_income:,.0f}")
    return Text("\n".join(lines))
