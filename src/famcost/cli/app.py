from __future__ import annotations

"""
famcost CLI Wrapper (Typer + Rich)

Local-only tracker for a family business's daily income and costs.

All paths are resolved from a single workspace root:
  --data-dir / FAMCOST_DATA env var / current working directory
"""

from pathlib import Path
from typing import List, Optional

import typer

from famcost.cli.command.util import configure_logging
from famcost.workspace import Workspace

HELP_WRITE = "Persist changes (default: dry-run)"
HELP_YEAR = "Year (defaults to the current year)"
HELP_MONTH = "Month 1-12 (defaults to the current month)"

APP_HELP = "Family cost tracker (local-only)"

app = typer.Typer(no_args_is_help=True, add_completion=False, help=APP_HELP)


@app.callback()
def main(
    ctx: typer.Context,
    data_dir: Optional[Path] = typer.Option(
        None,
        "--data-dir",
        envvar="FAMCOST_DATA",
        help="Workspace root directory (default: current directory)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """famcost: all paths resolved from a single workspace root."""
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["workspace"] = Workspace.resolve(data_dir)


def _ws(ctx: typer.Context) -> Workspace:
    return ctx.obj["workspace"]


@app.command()
def init(ctx: typer.Context):
    """Initialize a workspace with data/ and config/famcost.yml.

    Safe to run on an existing workspace; skips anything that already exists.

    Examples:
      famcost --data-dir ~/family-cost init
      famcost init
    """
    from famcost.cli.command import init as cmd_init

    code = cmd_init.run(workspace=_ws(ctx))
    raise typer.Exit(code=code)


@app.command()
def units(ctx: typer.Context):
    """List configured units and any unit names in records that match none of them."""
    from famcost.cli.command import units as cmd_units

    code = cmd_units.run(workspace=_ws(ctx))
    raise typer.Exit(code=code)


@app.command()
def add(
    ctx: typer.Context,
    date: Optional[str] = typer.Option(None, "--date", "-d", help="Day to record, YYYY-MM-DD (default: today)"),
    unit: List[str] = typer.Option([], "--unit", "-u", help="Unit figures as NAME=INCOME[/COST] (repeatable)"),
    bazar: List[str] = typer.Option([], "--bazar", "-b", help="Bazar item as NAME=PRICE (repeatable)"),
    other: List[str] = typer.Option([], "--other", "-o", help="Other expense as NAME=PRICE (repeatable)"),
    remove_item: List[str] = typer.Option([], "--remove-item", help="Remove a bazar/other item by ID (repeatable)"),
    building_income: Optional[str] = typer.Option(None, "--building-income", help="Flat building income for the day"),
    write: bool = typer.Option(False, "--write", help=HELP_WRITE),
):
    """Add or update the record for one day.

    An existing record for the day is loaded first; options only change what
    they name. Units left at zero income and cost are not saved.

    Examples:
      famcost add --unit Car=3000/200 --unit Auto=800 --bazar "Rice & Oil=450" --write
      famcost add --date 2026-02-10 --unit Car=/250 --write
      famcost add --date 2026-02-10 --building-income 1000 --other "Electric bill=600" --write
      famcost add --date 2026-02-10 --remove-item 3f9a1c2b7 --write

    Safety: dry-run by default. Use --write to persist changes.
    """
    from famcost.cli.command import add as cmd_add

    code = cmd_add.run(
        workspace=_ws(ctx),
        date=date,
        unit_values=unit,
        bazar=bazar,
        other=other,
        remove_items=remove_item,
        building_income=building_income,
        write=write,
    )
    raise typer.Exit(code=code)


@app.command()
def stats(
    ctx: typer.Context,
    year: Optional[int] = typer.Option(None, "--year", "-y", help=HELP_YEAR),
    month: Optional[int] = typer.Option(None, "--month", "-m", help=HELP_MONTH),
    bazar_limit: Optional[int] = typer.Option(10, "--bazar-limit", min=1, help="Bazar days to list"),
):
    """Show today's totals, a month's totals, per-unit figures and bazar spend by day.

    Examples:
      famcost stats
      famcost stats --year 2026 --month 2
    """
    from famcost.cli.command import stats as cmd_stats

    code = cmd_stats.run(workspace=_ws(ctx), year=year, month=month, bazar_limit=bazar_limit)
    raise typer.Exit(code=code)


@app.command()
def history(
    ctx: typer.Context,
    year: Optional[int] = typer.Option(None, "--year", "-y", help=HELP_YEAR),
    month: Optional[int] = typer.Option(None, "--month", "-m", help=HELP_MONTH),
    detail: bool = typer.Option(False, "--detail", help="List each day's entries and item IDs"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Max number of days to show"),
):
    """List a month's records, newest first, with In/Out/Balance per day.

    Examples:
      famcost history
      famcost history -y 2026 -m 2 --detail
    """
    from famcost.cli.command import history as cmd_history

    code = cmd_history.run(workspace=_ws(ctx), year=year, month=month, detail=detail, limit=limit)
    raise typer.Exit(code=code)


@app.command()
def unit(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Unit name (exact match)"),
    year: Optional[int] = typer.Option(None, "--year", "-y", help="Restrict to a year"),
    month: Optional[int] = typer.Option(None, "--month", "-m", help="Restrict to a month (requires --year)"),
):
    """Show one unit's totals and day-by-day figures.

    Examples:
      famcost unit Car
      famcost unit Ris-Sharif-1 --year 2026 --month 2
    """
    from famcost.cli.command import unit as cmd_unit

    code = cmd_unit.run(workspace=_ws(ctx), unit=name, year=year, month=month)
    raise typer.Exit(code=code)


if __name__ == "__main__":
    app()
