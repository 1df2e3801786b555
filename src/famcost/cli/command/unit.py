from __future__ import annotations

"""
Unit detail view: totals and day-by-day figures for one unit.
"""

from typing import Optional

from rich.table import Table
from rich.text import Text

from famcost.services.aggregation_service import unit_history, unit_totals
from famcost.storage import StorageError
from famcost.workspace import Workspace

from .util import console, escape, fmt_amount, month_label, open_tracker, validate_period


def run(
    *,
    workspace: Workspace,
    unit: str,
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> int:
    """Show one unit's income, cost and net, lifetime or for a year/month.

    Returns an exit code (0 for success, non-zero for error).
    """
    if not validate_period(year, month):
        return 1
    if month is not None and year is None:
        console.print("[red]Error:[/] --month requires --year")
        return 1

    opened = open_tracker(workspace)
    if opened is None:
        return 1
    settings, store = opened

    try:
        records = store.get_all_records()
    except StorageError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        return 1

    if unit not in settings.units:
        console.print(
            f"[yellow]'{escape(unit)}' is not a configured unit; "
            "showing entries recorded under that exact name.[/]"
        )

    totals = unit_totals(records, unit, year, month)
    history = unit_history(records, unit, year, month)

    if year and month:
        period = month_label(year, month)
    elif year:
        period = str(year)
    else:
        period = "All time"

    if not history:
        console.print(f"[yellow]No entries for[/] [bold]{escape(unit)}[/] ({period}).")
        return 0

    table = Table(title=f"{escape(unit)}: {period} ({settings.currency})", show_lines=False)
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Income", justify="right")
    table.add_column("Cost", justify="right")
    table.add_column("Net", justify="right")

    for p in history:
        table.add_row(p.date, fmt_amount(p.income), fmt_amount(-p.cost), fmt_amount(p.net))

    table.add_row("", Text(""), Text(""), Text(""))
    table.add_row(
        Text("Total", style="bold"),
        fmt_amount(totals.income),
        fmt_amount(-totals.cost),
        fmt_amount(totals.net),
    )
    console.print(table)
    return 0
