"""Initialize a new famcost workspace directory."""

from __future__ import annotations

from famcost.workspace import Workspace

from .util import console

_STARTER_SETTINGS_YML = """\
# Family cost tracker settings
#
# units: income-generating units, in display order. Entries are matched to
# units by exact name, so renaming a unit here orphans its past entries
# (`famcost units` lists such names).
#
# timezone: IANA zone that decides which calendar day is "today".
# backend: sqlite (data/records.db) or json (data/records.json).

units:
  - Car
  - Ris-Sharif-1
  - Ris-Sharif-2
  - Ris-Roman-1
  - Ris-Roman-2
  - Auto
timezone: Asia/Dhaka
backend: sqlite
currency: TK
"""


def run(*, workspace: Workspace) -> int:
    """Initialize a workspace with its directories and a starter settings file.

    Skips anything that already exists (safe to run on an existing workspace).

    Args:
        workspace: Workspace to initialize

    Returns:
        Exit code (0 = success)
    """
    root = workspace.root
    console.print(f"[bold cyan]Initializing workspace:[/] {root}\n")

    created = []
    skipped = []

    for directory in [workspace.data_dir, workspace.config_dir]:
        if directory.exists():
            skipped.append(str(directory.relative_to(root)) + "/")
        else:
            directory.mkdir(parents=True, exist_ok=True)
            created.append(str(directory.relative_to(root)) + "/")

    path = workspace.settings_path
    if path.exists():
        skipped.append(str(path.relative_to(root)))
    else:
        path.write_text(_STARTER_SETTINGS_YML, encoding="utf-8")
        created.append(str(path.relative_to(root)))

    if created:
        console.print("[green]Created:[/]")
        for c in created:
            console.print(f"  {c}")

    if skipped:
        console.print("[dim]Already exists (skipped):[/dim]")
        for s in skipped:
            console.print(f"  [dim]{s}[/dim]")

    if not created:
        console.print("[green]Workspace already fully initialized.[/]")
    else:
        console.print(f"\n[green]Workspace ready at {root}[/]")
        console.print("\n[dim]Next steps:[/dim]")
        console.print("  1. Edit config/famcost.yml to list your units")
        console.print("  2. Run: famcost add --unit Car=3000/200 --bazar 'Rice=450' --write")
        console.print("  3. Run: famcost stats")

    return 0
