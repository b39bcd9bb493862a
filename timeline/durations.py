"""
timeline/durations.py
Duration strings ("3d 09h 30m") <-> integer minutes, and timeline timestamps.

Timeline durations are written by hand on the laytime statement, so parsing
is lenient: anything that is not a well-formed duration counts as zero.
Two sentinels appear in the feed:
  "0m"      : an instantaneous marker event
  "ongoing" : an open-ended block; must never be summed into totals
"""
import math
import re
from datetime import datetime
from typing import Optional

ONGOING = "ongoing"
INSTANT = "0m"

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

_DURATION_RE = re.compile(
    r"^\s*(?:(?P<d>\d+)d)?\s*(?:(?P<h>\d+)h)?\s*(?:(?P<m>\d+)m)?\s*$"
)

_MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}
_EVENT_TIME_RE = re.compile(
    r"^\s*(?P<day>\d{1,2})\s+(?P<mon>[A-Za-z]{3})\s+(?P<hh>\d{1,2}):(?P<mm>\d{2})\s*$"
)


def is_open_ended(duration) -> bool:
    return isinstance(duration, str) and duration.strip().lower() == ONGOING


def is_instantaneous(duration) -> bool:
    return isinstance(duration, str) and duration.strip() == INSTANT


def parse_duration(duration) -> int:
    """
    Parse "Xd Yh Zm" (any subset, in that order) into whole minutes.

    "ongoing", empty, None and unparsable input all give 0. Callers that need
    to tell an open block from a zero one check is_open_ended() first.
    """
    if not isinstance(duration, str) or not duration.strip():
        return 0
    match = _DURATION_RE.match(duration)
    if not match:
        return 0
    days = int(match.group("d") or 0)
    hours = int(match.group("h") or 0)
    minutes = int(match.group("m") or 0)
    return days * MINUTES_PER_DAY + hours * MINUTES_PER_HOUR + minutes


def format_duration(minutes) -> str:
    """
    Canonical "Xd Yh Zm" with zero components dropped; never empty.

    Fractional minutes are rounded here, at display time. Negative values
    keep their sign so signed differences stay readable. Non-numeric, NaN
    and infinite input render as "0m".
    """
    if (not isinstance(minutes, (int, float)) or isinstance(minutes, bool)
            or not math.isfinite(minutes)):
        return INSTANT
    total = int(round(minutes))
    sign = "-" if total < 0 else ""
    total = abs(total)

    days, rest = divmod(total, MINUTES_PER_DAY)
    hours, mins = divmod(rest, MINUTES_PER_HOUR)

    parts: list[str] = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if mins or not parts:
        parts.append(f"{mins}m")
    return sign + " ".join(parts)


def format_hours(hours: float) -> str:
    if not isinstance(hours, (int, float)) or isinstance(hours, bool):
        return INSTANT
    return format_duration(hours * MINUTES_PER_HOUR)


def parse_event_time(text, year: int) -> Optional[datetime]:
    """'12 May 05:45' -> datetime(year, 5, 12, 5, 45); None when unparsable."""
    if not isinstance(text, str):
        return None
    match = _EVENT_TIME_RE.match(text)
    if not match:
        return None
    month = _MONTHS.get(match.group("mon").lower())
    if month is None:
        return None
    try:
        return datetime(
            year, month, int(match.group("day")),
            int(match.group("hh")), int(match.group("mm")),
        )
    except ValueError:
        return None


def minutes_between(start, end, year: int) -> Optional[float]:
    """Signed minutes from start to end, or None if either timestamp is unreadable."""
    t0 = parse_event_time(start, year)
    t1 = parse_event_time(end, year)
    if t0 is None or t1 is None:
        return None
    return (t1 - t0).total_seconds() / 60
