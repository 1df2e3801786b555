from __future__ import annotations

import logging
from typing import Optional, Tuple

import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.text import Text

from famcost.config import TrackerSettings, load_settings
from famcost.storage import RecordStore, StorageError, open_record_store
from famcost.workspace import Workspace

console = Console()

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def fmt_amount(amt: float) -> Text:
    if amt == 0:
        amt = 0.0  # no "-0"
    s = f"{amt:,.0f}" if float(amt).is_integer() else f"{amt:,.2f}"
    if amt < 0:
        return Text(s, style="bold red")
    elif amt > 0:
        return Text(s, style="bold green")
    return Text(s)


def month_label(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month - 1]} {year}"


def open_tracker(workspace: Workspace) -> Optional[Tuple[TrackerSettings, RecordStore]]:
    """Load settings and open the record store, printing a message on failure."""
    try:
        settings = load_settings(workspace.settings_path)
    except ValidationError as e:
        console.print(f"[red]Error:[/] Invalid settings in {escape(str(workspace.settings_path))}:")
        for err in e.errors(include_url=False):
            loc = ".".join(str(p) for p in err["loc"]) or "(root)"
            console.print(f"  {escape(loc)}: {escape(err['msg'])}")
        return None
    except yaml.YAMLError as e:
        console.print(f"[red]Error:[/] Cannot parse {escape(str(workspace.settings_path))}: {escape(str(e))}")
        return None
    try:
        store = open_record_store(settings, workspace)
    except StorageError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        return None
    return settings, store


def validate_period(year: Optional[int], month: Optional[int]) -> bool:
    if month is not None and (month < 1 or month > 12):
        console.print("[red]Error:[/] --month must be between 1 and 12")
        return False
    if year is not None and year < 1:
        console.print("[red]Error:[/] --year must be positive")
        return False
    return True
