"""Parse clock times out of free-text Mass schedule entries."""
from __future__ import annotations

import re
from typing import Iterator

# 8:00, 8:30am, 9am, 6:00 p.m., 12:00 noon
TIME_RE = re.compile(r"(\d{1,2})(?::(\d{2}))?\s*(am|pm|noon|a\.m\.|p\.m\.)?", re.IGNORECASE)

MINUTES_PER_DAY = 24 * 60


def _resolve_hour(hours: int, period: str | None) -> int:
    if period == "pm" and hours < 12:
        hours += 12
    if period == "am" and hours == 12:
        hours = 0
    if period == "noon":
        hours = 12

    # No meridiem: "1:00, 2:00" are read as afternoon, "7:00" stays morning.
    # This is a guess; a bare "11:00" meaning 11pm comes out wrong.
    if not period and 1 <= hours <= 6:
        hours += 12
    return hours


def parse_times(text: str) -> Iterator[int]:
    """Yield minutes since midnight for every clock time found in ``text``.

    Times are produced in order of appearance. Tokens that cannot be a time of
    day (the ``20`` and ``25`` of a year, minutes above 59) are skipped.
    """
    for match in TIME_RE.finditer(text or ""):
        minutes = int(match.group(2)) if match.group(2) else 0
        period = match.group(3).lower().replace(".", "") if match.group(3) else None
        if minutes > 59:
            continue

        value = _resolve_hour(int(match.group(1)), period) * 60 + minutes
        if 0 <= value < MINUTES_PER_DAY:
            yield value


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as a 12-hour clock string, e.g. ``10:00 AM``."""
    hours, mins = divmod(minutes, 60)
    ampm = "PM" if hours >= 12 else "AM"
    return f"{hours % 12 or 12}:{mins:02d} {ampm}"
