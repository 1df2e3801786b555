from __future__ import annotations

# Command implementations for the famcost CLI.
# Each command module exposes a `run(...)` function that performs the action
# and prints to the console. Typer wrappers in famcost.cli.app delegate here.

__all__ = [
    "add",
    "history",
    "init",
    "stats",
    "unit",
    "units",
]
