"""List configured units and flag entries recorded under other names."""

from __future__ import annotations

from rich.table import Table
from rich.text import Text

from famcost.services.aggregation_service import all_unit_totals, unmatched_unit_names
from famcost.storage import StorageError
from famcost.workspace import Workspace

from .util import console, escape, fmt_amount, open_tracker


def run(*, workspace: Workspace) -> int:
    opened = open_tracker(workspace)
    if opened is None:
        return 1
    settings, store = opened

    try:
        records = store.get_all_records()
    except StorageError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        return 1

    table = Table(title=f"Units (lifetime, {settings.currency})", show_lines=False)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Unit", style="cyan", no_wrap=True)
    table.add_column("Net", justify="right")
    for i, totals in enumerate(all_unit_totals(records, settings.units), start=1):
        table.add_row(str(i), Text(totals.unit_name), fmt_amount(totals.net))
    console.print(table)

    unmatched = unmatched_unit_names(records, settings.units)
    if unmatched:
        console.print("\n[yellow]Entries recorded under unconfigured unit names:[/]")
        for name in unmatched:
            console.print(f"  {escape(name)}")
        console.print(
            "[dim]These are not attributed to any unit. Add the name back to "
            "config/famcost.yml to count them again.[/dim]"
        )
        return 0

    console.print("[green]All recorded unit names match the configuration.[/]")
    return 0
