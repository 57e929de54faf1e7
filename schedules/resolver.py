"""Resolve the next Mass time today for a venue."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from .normalize import normalize_name
from .restrictions import SATURDAY, SUNDAY, day_of_week, day_restriction_conflict
from .table import MassCategory, ScheduleEntry, ScheduleMatch, ScheduleTable
from .times import parse_times

logger = logging.getLogger(__name__)


def categories_for(today: int) -> frozenset[MassCategory]:
    """Return the schedule categories that apply on weekday ``today`` (0=Sunday).

    Saturday evening Masses anticipate Sunday, so Saturday takes both the
    weekday and anticipated lists.
    """
    if today == SUNDAY:
        return frozenset({MassCategory.SUNDAY})
    if today == SATURDAY:
        return frozenset({MassCategory.WEEKDAY, MassCategory.ANTICIPATED_SUNDAY})
    return frozenset({MassCategory.WEEKDAY})


def next_occurrence(entries: Iterable[ScheduleEntry], now: datetime) -> Optional[int]:
    """Return minutes since midnight of the first Mass at or after ``now``.

    ``None`` means there are no more Masses today.
    """
    today = day_of_week(now)
    now_minutes = now.hour * 60 + now.minute
    categories = categories_for(today)

    upcoming = [
        t
        for entry in entries
        if entry.category in categories and not day_restriction_conflict(entry.time, today)
        for t in parse_times(entry.time)
        if t >= now_minutes
    ]
    return min(upcoming, default=None)


class ScheduleResolver:
    """Looks venues up in an injected schedule table."""

    def __init__(self, table: ScheduleTable):
        self.table = table

    def lookup(self, name: str | None) -> Optional[ScheduleMatch]:
        """Return the schedule for a venue name, or None when it is not listed."""
        key = normalize_name(name)
        match = self.table.get(key) if key else None
        if match is None:
            logger.debug("No schedule found for %r -> %r", name, key)
        return match
