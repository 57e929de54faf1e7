"""Mass schedule data model and table loading."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from dotenv import load_dotenv

from .normalize import normalize_name

load_dotenv()

BASE_PATH = Path(__file__).resolve().parent.parent
DEFAULT_TABLE = Path(os.getenv("MASS_SCHEDULES_PATH", BASE_PATH / "data" / "mass_schedules.json"))

logger = logging.getLogger(__name__)
if os.getenv("MASS_FINDER_DEBUG"):
    logging.basicConfig(level=logging.INFO, format="%(message)s")


class MassCategory(str, Enum):
    """Liturgical day-type of a schedule entry."""

    SUNDAY = "Sunday Masses"
    WEEKDAY = "Weekday Masses"
    ANTICIPATED_SUNDAY = "Anticipated Sunday Masses"


@dataclass(frozen=True)
class ScheduleEntry:
    """One raw line of a parish schedule, e.g. ``Mon to Fri 7:00am``."""

    category: MassCategory
    time: str

    def to_dict(self) -> dict[str, str]:
        return {"type": self.category.value, "time": self.time}


@dataclass(frozen=True)
class ScheduleMatch:
    """Schedule entries for one venue as published by the schedule source."""

    original_name: str
    schedule: tuple[ScheduleEntry, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "original_name": self.original_name,
            "schedule": [entry.to_dict() for entry in self.schedule],
        }


ScheduleTable = Mapping[str, ScheduleMatch]


def _parse_match(key: str, value: Any) -> ScheduleMatch:
    if isinstance(value, list):
        original_name, items = key, value
    else:
        original_name, items = value.get("originalName", key), value.get("schedule", [])

    entries = tuple(
        ScheduleEntry(category=MassCategory(item["type"]), time=item["time"])
        for item in items
    )
    return ScheduleMatch(original_name=original_name, schedule=entries)


def build_schedule_table(data: Mapping[str, Any]) -> ScheduleTable:
    """Build a read-only table from decoded JSON.

    Values are either ``{"originalName": ..., "schedule": [...]}`` or a bare
    list of ``{"type": ..., "time": ...}`` items. Keys are normalized so that
    they line up with :func:`normalize_name` output. Unknown categories raise
    ``ValueError``.
    """
    table: dict[str, ScheduleMatch] = {}
    for raw_key, value in data.items():
        key = normalize_name(raw_key)
        if not key:
            logger.warning("Skipping schedule with empty key: %r", raw_key)
            continue
        if key in table:
            logger.warning("Duplicate schedule key %r (from %r), keeping first", key, raw_key)
            continue
        table[key] = _parse_match(raw_key, value)
    return MappingProxyType(table)


def load_schedule_table(path: str | Path = DEFAULT_TABLE) -> ScheduleTable:
    """Load the schedule table from a JSON file."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    table = build_schedule_table(data)
    logger.info("Loaded %d venue schedule(s) from %s", len(table), path)
    return table
