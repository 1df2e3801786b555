"""
Workspace - centralized data path resolution for the tracker.

A Workspace represents the root directory holding the tracker's configuration
and record store. All paths are computed relative to this root.

Resolution priority:
1. Explicit path (--data-dir CLI option)
2. FAMCOST_DATA environment variable
3. Current working directory
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Workspace:
    """Root directory for all tracker data paths."""

    root: Path

    @classmethod
    def resolve(cls, explicit: Path | None = None) -> Workspace:
        """Resolve workspace root from explicit path, env var, or CWD.

        Args:
            explicit: Explicitly provided path (highest priority)

        Returns:
            Workspace with resolved root
        """
        if explicit is not None:
            return cls(root=explicit)
        env = os.environ.get("FAMCOST_DATA")
        if env:
            return cls(root=Path(env))
        return cls(root=Path.cwd())

    @property
    def data_dir(self) -> Path:
        return self.root / "data"

    @property
    def config_dir(self) -> Path:
        return self.root / "config"

    @property
    def settings_path(self) -> Path:
        return self.config_dir / "famcost.yml"

    @property
    def sqlite_store_path(self) -> Path:
        return self.data_dir / "records.db"

    @property
    def json_store_path(self) -> Path:
        return self.data_dir / "records.json"


__all__ = ["Workspace"]
