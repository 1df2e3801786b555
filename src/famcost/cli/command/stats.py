from __future__ import annotations

"""
Stats view: today, the selected month, per-unit figures and bazar spend by day.
"""

from datetime import datetime
from typing import Optional

from rich.table import Table
from rich.text import Text

from famcost.services.aggregation_service import Dashboard, build_dashboard, current_period, resolve_today
from famcost.storage import StorageError
from famcost.workspace import Workspace

from .util import console, escape, fmt_amount, month_label, open_tracker, validate_period


def run(
    *,
    workspace: Workspace,
    year: Optional[int] = None,
    month: Optional[int] = None,
    bazar_limit: Optional[int] = 10,
    now: Optional[datetime] = None,
) -> int:
    """Display the dashboard for a month (default: the current month in the configured zone).

    Returns an exit code (0 for success, non-zero for error).
    """
    if not validate_period(year, month):
        return 1

    opened = open_tracker(workspace)
    if opened is None:
        return 1
    settings, store = opened

    today = resolve_today(settings.zone, now)
    this_year, this_month = current_period(settings.zone, now)
    the_year = year or this_year
    the_month = month or this_month

    try:
        records = store.get_all_records()
    except StorageError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        return 1

    dashboard = build_dashboard(records, settings.units, today, the_year, the_month)
    _display_dashboard(dashboard, currency=settings.currency, bazar_limit=bazar_limit)
    return 0


def _display_dashboard(dash: Dashboard, *, currency: str, bazar_limit: Optional[int]) -> None:
    label = month_label(dash.month.year, dash.month.month)

    summary = Table(title=f"Family Cost ({currency})", show_header=False, show_lines=False)
    summary.add_column("Figure", style="bold")
    summary.add_column("Amount", justify="right")
    summary.add_row(f"Today's income ({dash.today.date})", fmt_amount(dash.today.income))
    summary.add_row("Today's cost", fmt_amount(-dash.today.cost))
    summary.add_row("", Text(""))
    summary.add_row(f"{label} income", fmt_amount(dash.month.income))
    if dash.month.building_income:
        summary.add_row("  of which building", Text(f"{dash.month.building_income:,.0f}", style="dim"))
    summary.add_row(f"{label} cost", fmt_amount(-dash.month.cost))
    summary.add_row("  of which bazar", Text(f"{dash.month.bazar:,.0f}", style="dim"))
    summary.add_row(f"{label} balance", fmt_amount(dash.month.balance))
    console.print(summary)

    units = Table(title=f"Units: {label}", show_lines=False)
    units.add_column("Unit", style="cyan", no_wrap=True)
    units.add_column("Income", justify="right")
    units.add_column("Cost", justify="right")
    units.add_column("Net", justify="right")
    for u in dash.units:
        units.add_row(Text(u.unit_name), fmt_amount(u.income), fmt_amount(-u.cost), fmt_amount(u.net))
    console.print(units)

    if dash.unmatched_units:
        console.print(
            "[yellow]Entries for unconfigured units are not counted above:[/] "
            + escape(", ".join(dash.unmatched_units))
        )

    days = dash.bazar_by_date
    if not days:
        console.print("[dim]No bazar purchases recorded.[/dim]")
        return
    shown = days[:bazar_limit] if bazar_limit else days
    bazar = Table(title="Bazar by date", show_lines=False)
    bazar.add_column("Date", style="cyan", no_wrap=True)
    bazar.add_column(f"Total ({currency})", justify="right")
    for d in shown:
        bazar.add_row(d.date, fmt_amount(-d.total))
    console.print(bazar)
    if len(shown) < len(days):
        console.print(f"[dim]{len(days) - len(shown)} older days not shown[/dim]")
