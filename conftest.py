# Make the package under src/ importable during specs without installing it,
# and share workspace and console fixtures between spec modules.
from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))


@pytest.fixture
def workspace(tmp_path):
    from famcost.workspace import Workspace

    return Workspace(root=tmp_path)


@pytest.fixture
def console_output(monkeypatch):
    """Route every command's Rich console into a buffer; returns the buffer."""
    from io import StringIO

    from rich.console import Console

    from famcost.cli.command import add, history, init, stats, unit, units, util

    buf = StringIO()
    console = Console(file=buf, width=200, color_system=None)
    for module in (add, history, init, stats, unit, units, util):
        monkeypatch.setattr(module, "console", console)
    return buf
