"""Day-of-week restriction heuristic for schedule entries.

Entries such as ``"Mon., Wed. 7:00am"`` or ``"Mon to Fri 12:30pm"`` only apply
on some days even though they sit under a broad category like
"Weekday Masses". The words before the first digit are scanned for day names
to decide whether the entry applies today.

Days are numbered 0=Sunday through 6=Saturday.
"""
from __future__ import annotations

import re
from datetime import datetime

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)

DAY_TOKENS = {
    "mon": MONDAY,
    "tue": TUESDAY,
    "wed": WEDNESDAY,
    "thu": THURSDAY,
    "thur": THURSDAY,
    "fri": FRIDAY,
    "sat": SATURDAY,
    "sun": SUNDAY,
}

RANGE_CONNECTORS = (" to ", "-")

_DIGIT_RE = re.compile(r"\d")


def day_of_week(moment: datetime) -> int:
    """Return the weekday of ``moment`` with Sunday as 0."""
    return (moment.weekday() + 1) % 7


def day_restriction_conflict(text: str, today: int) -> bool:
    """Return True when ``text`` is restricted to days that exclude ``today``."""
    first_digit = _DIGIT_RE.search(text or "")
    if first_digit is None:
        return False

    prefix = text[: first_digit.start()].lower()
    # "7:00 am" and friends
    if len(prefix.strip()) < 3:
        return False

    days_found = {day for token, day in DAY_TOKENS.items() if token in prefix}
    if not days_found:
        return False

    if any(connector in prefix for connector in RANGE_CONNECTORS):
        if "mon" in prefix and "fri" in prefix and MONDAY <= today <= FRIDAY:
            return False
        if "mon" in prefix and "sat" in prefix and MONDAY <= today <= SATURDAY:
            return False

    return today not in days_found
