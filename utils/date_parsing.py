"""Date normalisation for LinkedIn export fields.

Two export formats are fixed by LinkedIn and parsed exactly:

* ``FORMAT_SENT_AT`` for invitation timestamps, e.g. ``1/2/24, 3:00 PM``
* ``FORMAT_CONNECTED_ON`` for connection dates, e.g. ``02 Jan 2024``

Every other date column goes through :func:`parse_date` without a hint, which
accepts ISO 8601 variants and a few common layouts. None of these helpers
raise on bad input; they return ``None`` and callers decide what to skip.
"""
from __future__ import annotations

import re
from datetime import datetime, time
from typing import Optional


FORMAT_SENT_AT = "%m/%d/%y, %I:%M %p"
FORMAT_CONNECTED_ON = "%d %b %Y"

_GENERIC_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
    "%d %b %Y",
    "%b %d, %Y",
)

_UTC_SUFFIX = re.compile(r"\s*(UTC|GMT)$", re.IGNORECASE)
_ISO_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _clean(text: Optional[str]) -> str:
    if text is None:
        return ""
    # Exports from some locales put narrow/no-break spaces before AM/PM
    s = str(text).replace("\u202f", " ").replace("\xa0", " ")
    return " ".join(s.split())


def to_naive(dt: datetime) -> datetime:
    """Drop any UTC offset, keeping the wall-clock time."""
    return dt.replace(tzinfo=None) if dt.tzinfo is not None else dt


def _parse_generic(s: str) -> Optional[datetime]:
    iso = _UTC_SUFFIX.sub("", s)
    if iso.endswith(("Z", "z")):
        iso = iso[:-1] + "+00:00"
    try:
        return to_naive(datetime.fromisoformat(iso))
    except ValueError:
        pass
    for fmt in _GENERIC_FORMATS:
        try:
            return datetime.strptime(iso, fmt)
        except ValueError:
            continue
    return None


def parse_date(text: Optional[str], format_hint: Optional[str] = None) -> Optional[datetime]:
    """Parse ``text`` into a naive datetime, or return None.

    With ``format_hint`` only that strptime format is attempted. Timezone-aware
    values keep their wall-clock time and drop the offset.
    """
    s = _clean(text)
    if not s:
        return None
    if format_hint:
        try:
            return datetime.strptime(s, format_hint)
        except ValueError:
            return None
    return _parse_generic(s)


def month_key(dt: datetime) -> str:
    return f"{dt.year:04d}-{dt.month:02d}"


def record_month_key(text: Optional[str], format_hint: Optional[str] = None) -> Optional[str]:
    dt = parse_date(text, format_hint)
    return month_key(dt) if dt is not None else None


def month_label(key: str) -> str:
    """Render a ``YYYY-MM`` key as ``Jan 2024``; unknown keys pass through."""
    try:
        return datetime.strptime(key, "%Y-%m").strftime("%b %Y")
    except ValueError:
        return key


def parse_bound(text: Optional[str], end_of_day: bool = False) -> Optional[datetime]:
    """Parse a user-supplied date-range bound.

    A bare ``YYYY-MM-DD`` end bound is widened to the last moment of that day so
    the range stays inclusive.
    """
    s = _clean(text)
    if not s:
        return None
    dt = parse_date(s)
    if dt is None:
        return None
    if end_of_day and _ISO_DATE_ONLY.match(s):
        return datetime.combine(dt.date(), time.max)
    return dt
