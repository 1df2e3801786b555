from __future__ import annotations

"""
Tracker configuration (config/famcost.yml).

Scope
- Pydantic v2 model for the settings file plus YAML load/save helpers.
- Units are fixed configuration, not user data; their order is the display order.
- Paths are resolved by famcost.workspace.Workspace, not here.
"""

from enum import StrEnum
from pathlib import Path
import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_UNITS = [
    "Car",
    "Ris-Sharif-1",
    "Ris-Sharif-2",
    "Ris-Roman-1",
    "Ris-Roman-2",
    "Auto",
]

# Business day boundaries are taken in this zone, whatever the host's locale.
DEFAULT_TIMEZONE = "Asia/Dhaka"

DEFAULT_CURRENCY = "TK"


class StoreBackend(StrEnum):
    """Record store backends."""

    sqlite = "sqlite"
    json = "json"


class TrackerSettings(BaseModel):
    """Root configuration for the tracker."""

    units: list[str] = Field(
        default_factory=lambda: list(DEFAULT_UNITS),
        description="Ordered list of unit names",
    )
    timezone: str = Field(default=DEFAULT_TIMEZONE, description="IANA zone for 'today'")
    backend: StoreBackend = Field(default=StoreBackend.sqlite, description="Record store backend")
    currency: str = Field(default=DEFAULT_CURRENCY, description="Currency label for display")

    @field_validator("units")
    @classmethod
    def _validate_units(cls, value: list[str]) -> list[str]:
        names = [u.strip() for u in value]
        if any(not n for n in names):
            raise ValueError("Unit names cannot be empty")
        if len(set(names)) != len(names):
            raise ValueError("Unit names must be unique")
        return names

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {value}") from e
        return value

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


def load_settings(path: Path) -> TrackerSettings:
    """Load tracker settings from YAML (safe loader).

    A missing file yields default settings. An invalid file raises
    pydantic.ValidationError so a typo never silently swaps the unit list.
    """
    if not path.exists():
        logger.debug("No settings file at %s; using defaults", path)
        return TrackerSettings()
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return TrackerSettings.model_validate(data)


def save_settings(path: Path, settings: TrackerSettings) -> None:
    """Write settings to YAML, creating parent directories if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump(mode="json")
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(
            data,
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )


__all__ = [
    "DEFAULT_CURRENCY",
    "DEFAULT_TIMEZONE",
    "DEFAULT_UNITS",
    "StoreBackend",
    "TrackerSettings",
    "load_settings",
    "save_settings",
]
