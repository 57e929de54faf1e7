"""Venue name normalization for schedule table lookups."""
from __future__ import annotations

import re

# ASCII-only: bilingual OSM names such as "聖德肋撒堂 St. Teresa's Church" lose
# their CJK part and key on the English name.
_SAINT_RE = re.compile(r"\bsaint\b", re.ASCII)
_PUNCT_RE = re.compile(r"[^\w\s]", re.ASCII)
_STOP_WORDS_RE = re.compile(r"\b(church|parish|chapel|mass\s+centre|center|catholic)\b", re.ASCII)
_SPACE_RE = re.compile(r"\s+", re.ASCII)


def _strip_words(s: str) -> str:
    s = _SAINT_RE.sub("st", s)
    s = _STOP_WORDS_RE.sub("", s)
    return _SPACE_RE.sub(" ", s).strip()


def normalize_name(name: str | None) -> str:
    """Return the canonical lookup key for a venue name.

    Steps run in a fixed order since later ones assume earlier ones ran:

    - lowercase
    - ``saint`` -> ``st`` (whole word only)
    - strip punctuation, so ``St. Joseph's`` becomes ``st josephs``
    - drop common words such as ``church`` and ``parish``
    - collapse whitespace

    Word removal repeats until nothing changes, so ``mass church centre``
    ends up empty rather than as ``mass centre``. The result is idempotent
    and ``""`` for empty input.
    """
    if not name:
        return ""

    s = name.lower()
    s = _SAINT_RE.sub("st", s)
    s = _PUNCT_RE.sub("", s)

    previous = None
    while s != previous:
        previous, s = s, _strip_words(s)
    return s
