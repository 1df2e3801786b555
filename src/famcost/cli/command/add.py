from __future__ import annotations

"""
Add or update the record for one day.

If the day already has a record it is loaded first, so the options only
change what they name: a --unit option overwrites that unit's figures, item
options append items, --remove-item drops one. Unit entries left at zero
income and zero cost are not saved.
"""

from datetime import datetime
from typing import Optional, Sequence, Tuple

from rich.table import Table
from rich.text import Text

from famcost.model.record import DailyRecord
from famcost.services.aggregation_service import day_summaries, resolve_today
from famcost.services.entry_service import (
    EntryError,
    add_bazar_item,
    add_other_item,
    finalize,
    parse_amount,
    parse_entry_date,
    remove_item,
    set_building_income,
    set_unit_values,
    start_draft,
)
from famcost.storage import StorageError
from famcost.workspace import Workspace

from .util import console, escape, fmt_amount, open_tracker


def parse_unit_option(text: str) -> Tuple[str, Optional[float], Optional[float]]:
    """Parse NAME=INCOME[/COST]. A blank figure leaves that figure unchanged."""
    name, sep, values = text.rpartition("=")
    if not sep or not name.strip():
        raise EntryError(f"Expected NAME=INCOME[/COST], got {text!r}")
    income_text, _, cost_text = values.partition("/")
    income = parse_amount(income_text) if income_text.strip() else None
    cost = parse_amount(cost_text) if cost_text.strip() else None
    return name.strip(), income, cost


def parse_item_option(text: str) -> Tuple[str, float]:
    """Parse NAME=PRICE."""
    name, sep, price_text = text.rpartition("=")
    if not sep or not name.strip() or not price_text.strip():
        raise EntryError(f"Expected NAME=PRICE, got {text!r}")
    return name.strip(), parse_amount(price_text)


def run(
    *,
    workspace: Workspace,
    date: Optional[str] = None,
    unit_values: Sequence[str] = (),
    bazar: Sequence[str] = (),
    other: Sequence[str] = (),
    remove_items: Sequence[str] = (),
    building_income: Optional[str] = None,
    write: bool = False,
    now: Optional[datetime] = None,
) -> int:
    """Create or update the record for a date (default: today in the configured zone).

    Returns an exit code (0 success; non-zero for errors). Dry-run when write=False.
    """
    opened = open_tracker(workspace)
    if opened is None:
        return 1
    settings, store = opened

    try:
        day = parse_entry_date(date) if date else resolve_today(settings.zone, now)
        records = store.get_all_records()
    except (EntryError, StorageError) as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        return 1

    draft = start_draft(records, day, settings.units)

    try:
        for item_id in remove_items:
            if not remove_item(draft, item_id):
                console.print(f"[yellow]No item with id[/] {escape(item_id)} [yellow]on {day}[/]")
        for text in unit_values:
            name, income, cost = parse_unit_option(text)
            set_unit_values(draft, name, income=income, cost=cost)
        for text in bazar:
            add_bazar_item(draft, *parse_item_option(text))
        for text in other:
            add_other_item(draft, *parse_item_option(text))
        if building_income is not None:
            set_building_income(draft, parse_amount(building_income))
    except EntryError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        if "Unknown unit" in str(e):
            console.print(f"Configured units: {escape(', '.join(settings.units))}")
        return 1

    record = finalize(draft)
    _display_record(record, is_update=draft.is_update, currency=settings.currency)

    if not write:
        console.print("[green]Dry-run:[/] no changes written. Use --write to persist.")
        return 0

    try:
        store.save_record(record)
    except StorageError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        return 1

    verb = "Updated" if draft.is_update else "Saved"
    console.print(f"[green]{verb} record for {record.date}[/]")
    return 0


def _display_record(record: DailyRecord, *, is_update: bool, currency: str) -> None:
    title = f"{'Update' if is_update else 'New'} entry: {record.date}"
    table = Table(title=title, show_lines=False)
    table.add_column("Kind", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column(f"Income ({currency})", justify="right")
    table.add_column(f"Cost ({currency})", justify="right")
    table.add_column("ID", style="dim", no_wrap=True)

    for log in record.unit_logs:
        table.add_row("Unit", Text(log.unit_name), fmt_amount(log.income), fmt_amount(log.cost), "")
    for item in record.bazar_items:
        table.add_row("Bazar", Text(item.name), Text(""), fmt_amount(item.price), Text(item.id))
    for item in record.other_items:
        table.add_row("Other", Text(item.name), Text(""), fmt_amount(item.price), Text(item.id))
    if record.building_income:
        table.add_row("Building", "", fmt_amount(record.building_income), Text(""), "")

    day = day_summaries([record])[0]
    table.add_row("", "", Text(""), Text(""), "")
    table.add_row("", Text("Total", style="bold"), fmt_amount(day.income), fmt_amount(day.cost), "")
    table.add_row("", Text("Balance", style="bold"), fmt_amount(day.balance), Text(""), "")

    console.print(table)
