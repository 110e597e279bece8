"""Time-window helpers.

Parses the fixed-width RFC3339 timestamp prefix of log lines and builds the
lookback window the analyzer filters on.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta, timezone

from .models import TimeWindow

TIMESTAMP_WIDTH = 25

_RFC3339_RE = re.compile(
    r"^(?P<y>\d{4})-(?P<mo>\d{2})-(?P<d>\d{2})"
    r"T(?P<h>\d{2}):(?P<mi>\d{2}):(?P<s>\d{2})(?:\.(?P<frac>\d+))?"
    r"(?:(?P<z>Z)|(?P<sign>[+-])(?P<oh>\d{2}):(?P<om>\d{2}))$"
)
_DURATION_RE = re.compile(r"(?P<value>\d+)(?P<unit>[hms])")
_DURATION_UNITS = {"h": "hours", "m": "minutes", "s": "seconds"}


def parse_rfc3339(s: str) -> datetime | None:
    """Parse a complete RFC3339 timestamp; return None when it is not one."""
    m = _RFC3339_RE.match(s)
    if not m:
        return None

    if m.group("z"):
        tz = UTC
    else:
        oh = int(m.group("oh"))
        om = int(m.group("om"))
        if oh > 23 or om > 59:
            return None
        offset = timedelta(hours=oh, minutes=om)
        tz = timezone(-offset if m.group("sign") == "-" else offset)

    frac = m.group("frac") or ""
    micro = int(frac[:6].ljust(6, "0")) if frac else 0
    try:
        return datetime(
            int(m.group("y")),
            int(m.group("mo")),
            int(m.group("d")),
            int(m.group("h")),
            int(m.group("mi")),
            int(m.group("s")),
            micro,
            tzinfo=tz,
        )
    except ValueError:
        return None


def line_timestamp(line: str) -> datetime | None:
    """Return the timestamp held in the first 25 characters of a line."""
    if len(line) < TIMESTAMP_WIDTH:
        return None
    return parse_rfc3339(line[:TIMESTAMP_WIDTH])


def lookback_window(duration: timedelta, *, now: datetime | None = None) -> TimeWindow:
    """Return the (now - duration, now) window."""
    if duration <= timedelta(0):
        raise ValueError("window duration must be > 0")
    end = now if now is not None else datetime.now(UTC)
    return TimeWindow(start=end - duration, end=end)


def parse_duration(s: str) -> timedelta:
    """Parse durations like 1h, 30m, 90s or 1h30m."""
    text = s.strip().lower()
    if not text:
        raise ValueError("duration must not be empty")

    pos = 0
    kwargs: dict[str, int] = {}
    for m in _DURATION_RE.finditer(text):
        if m.start() != pos:
            break
        unit = _DURATION_UNITS[m.group("unit")]
        kwargs[unit] = kwargs.get(unit, 0) + int(m.group("value"))
        pos = m.end()

    if pos != len(text) or not kwargs:
        raise ValueError(f"invalid duration '{s}' (examples: 1h, 30m, 1h30m)")
    return timedelta(**kwargs)


def describe_duration(duration: timedelta) -> str:
    """Render a duration for report headers ("hour", "2 hours", "30 minutes")."""
    seconds = int(duration.total_seconds())
    if seconds % 3600 == 0:
        count, name = seconds // 3600, "hour"
    elif seconds % 60 == 0:
        count, name = seconds // 60, "minute"
    else:
        count, name = seconds, "second"
    return name if count == 1 else f"{count} {name}s"
