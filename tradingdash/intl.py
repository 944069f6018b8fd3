"""Time-zone aware formatting of ISO-8601 timestamps for the dashboard.

Every panel that shows a wallclock or a delivery time goes through
these helpers, so the local / UTC toggle is a single switch.
"""

from __future__ import annotations

import functools
import re
from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

__all__ = [
    "INVALID_TIME",
    "INVALID_TIME_SEC",
    "now_hms",
    "now_hour_in_tz",
    "parse_iso",
    "short_time",
    "short_time_sec",
    "zone_label",
]

INVALID_TIME = "--:--"
INVALID_TIME_SEC = "--:--:--"

_ISO = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})"
    r"(?:[Tt ](\d{2}):(\d{2})(?::(\d{2})(?:[.,](\d+))?)?)?"
    r"\s*(Z|z|[+-]\d{2}(?::?\d{2})?)?$"
)


def _offset(text: str | None) -> tzinfo:
    if text is None or text in ("Z", "z"):
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    digits = text[1:].replace(":", "")
    hours = int(digits[:2])
    minutes = int(digits[2:4]) if len(digits) > 2 else 0
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_iso(iso: str) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Strings without an offset are read as UTC. Returns None when the
    text is not a valid timestamp.
    """
    match = _ISO.match(iso.strip())
    if match is None:
        return None
    year, month, day, hour, minute, second, frac, offset = match.groups()
    micros = int((frac or "0")[:6].ljust(6, "0"))
    try:
        parsed = datetime(
            int(year),
            int(month),
            int(day),
            int(hour or 0),
            int(minute or 0),
            int(second or 0),
            micros,
            tzinfo=_offset(offset),
        )
    except ValueError:
        return None
    return parsed.astimezone(timezone.utc)


@functools.lru_cache(maxsize=64)
def _zone(tz: str) -> tzinfo:
    if tz == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"unknown time zone: {tz!r}") from exc


def _now(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def _format(moment: datetime, tz: str, with_secs: bool) -> str:
    local = moment.astimezone(_zone(tz))
    return local.strftime("%H:%M:%S" if with_secs else "%H:%M")


def short_time(iso: str, tz: str) -> str:
    """Format a timestamp as ``HH:MM`` in ``tz``; ``--:--`` when invalid."""
    moment = parse_iso(iso)
    if moment is None:
        return INVALID_TIME
    return _format(moment, tz, with_secs=False)


def short_time_sec(iso: str, tz: str) -> str:
    """Format a timestamp as ``HH:MM:SS`` in ``tz``; ``--:--:--`` when invalid."""
    moment = parse_iso(iso)
    if moment is None:
        return INVALID_TIME_SEC
    return _format(moment, tz, with_secs=True)


def now_hms(tz: str, now: datetime | None = None) -> str:
    """Wallclock ``HH:MM:SS`` for the current (or given) instant in ``tz``."""
    return _format(_now(now), tz, with_secs=True)


def now_hour_in_tz(tz: str, now: datetime | None = None) -> float:
    """Hour of day in ``tz`` as a float, e.g. 14h30m gives 14.5."""
    hours, minutes, seconds = (float(part) for part in now_hms(tz, now).split(":"))
    return hours + minutes / 60.0 + seconds / 3600.0


def zone_label(tz: str, now: datetime | None = None) -> str:
    """Short zone tag (``CEST``, ``CET``, ``UTC`` ...) for the instant in ``tz``."""
    name = _now(now).astimezone(_zone(tz)).tzname()
    tokens = (name or "").split()
    return tokens[-1] if tokens else tz