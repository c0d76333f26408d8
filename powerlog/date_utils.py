"""Timestamp parsing and formatting helpers for journal output."""
from __future__ import annotations

import logging
import re
import time
from datetime import datetime, timedelta, timezone

logger = logging.getLogger("powerlog.dates")

_WEEKDAYS = {"Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"}
_OFFSET_RE = re.compile(r"([+-])(\d{2}):?(\d{2})$")

# Fixed offsets (minutes east of UTC) for abbreviations journalctl commonly prints.
_TZ_ABBREVIATIONS: dict[str, int] = {
    "UTC": 0,
    "GMT": 0,
    "Z": 0,
    "WET": 0,
    "WEST": 60,
    "BST": 60,
    "IST": 60,
    "CET": 60,
    "CEST": 120,
    "EET": 120,
    "EEST": 180,
    "MSK": 180,
    "AST": -240,
    "EST": -300,
    "EDT": -240,
    "CST": -360,
    "CDT": -300,
    "MST": -420,
    "MDT": -360,
    "PST": -480,
    "PDT": -420,
    "AKST": -540,
    "AKDT": -480,
    "HST": -600,
    "JST": 540,
    "KST": 540,
    "AWST": 480,
    "ACST": 570,
    "ACDT": 630,
    "AEST": 600,
    "AEDT": 660,
    "NZST": 720,
    "NZDT": 780,
}


def local_now() -> datetime:
    return datetime.now().astimezone()


def _local_zone_offset(name: str) -> int | None:
    std_name, dst_name = time.tzname
    if name == std_name:
        return -time.timezone // 60
    if name == dst_name and time.daylight:
        return -time.altzone // 60
    return None


def resolve_tz_abbreviation(name: str) -> timezone:
    """Map a zone abbreviation such as ``CET`` to a fixed-offset tzinfo.

    The host's own zone wins over the abbreviation table, since names like
    ``IST`` or ``CST`` mean different offsets in different regions. Unknown
    names fall back to UTC.
    """
    cleaned = (name or "").strip()
    token = cleaned.upper()
    minutes = _local_zone_offset(cleaned)
    if minutes is None:
        minutes = _TZ_ABBREVIATIONS.get(token)
    if minutes is None:
        logger.debug("Unknown timezone abbreviation %r, assuming UTC", name)
        return timezone.utc
    if minutes == 0:
        return timezone.utc
    return timezone(timedelta(minutes=minutes), token)


def parse_weekday_timestamp(weekday: str, day: str, clock: str, tz_name: str) -> datetime | None:
    """Parse the ``Mon 2025-01-01 08:00:00 UTC`` layout used by the boot listing."""
    if weekday not in _WEEKDAYS:
        return None
    try:
        naive = datetime.strptime(f"{day} {clock}", "%Y-%m-%d %H:%M:%S")
    except ValueError:
        return None
    return naive.replace(tzinfo=resolve_tz_abbreviation(tz_name))


def parse_iso_offset_timestamp(token: str) -> datetime | None:
    """Parse ``YYYY-MM-DDTHH:MM:SS+HH:MM`` (colon optional in the offset)."""
    cleaned = (token or "").strip()
    match = _OFFSET_RE.search(cleaned)
    if not match:
        return None
    sign, hours, minutes = match.groups()
    cleaned = f"{cleaned[:match.start()]}{sign}{hours}:{minutes}"
    try:
        parsed = datetime.fromisoformat(cleaned)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed


def format_clock(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S")


def format_minute(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M")
