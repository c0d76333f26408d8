"""Parse `journalctl --list-boots` output into boot and shutdown events."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta

from powerlog import config
from powerlog.models import BootInterval, EventKind, PowerEvent
from powerlog.observability import record_skipped_line
from powerlog.parsers.registry import SourceKind, rule_for

logger = logging.getLogger("powerlog.parsers.boots")


def _parse_row(line: str) -> BootInterval | None:
    # IDX BOOT_ID FIRST_ENTRY LAST_ENTRY
    parts = line.split(None, 2)
    if len(parts) < 3:
        return None

    rule = rule_for(SourceKind.BOOT_LIST)
    matches = rule.find(parts[2])
    if len(matches) < 2:
        return None

    start = rule.parse(matches[0])
    end = rule.parse(matches[1])
    if start is None or end is None:
        return None
    return BootInterval(id=parts[1], start=start, end=end)


def parse_boot_intervals(text: str) -> list[BootInterval]:
    """Parse every data row of the boot listing, skipping the header and bad rows."""
    intervals: list[BootInterval] = []
    lines = (text or "").splitlines()
    for line_no, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        interval = _parse_row(line)
        if interval is None:
            logger.debug("Skipping unparseable boot row %d: %r", line_no, line)
            record_skipped_line(SourceKind.BOOT_LIST.value)
            continue
        intervals.append(interval)
    return intervals


def boot_interval_events(
    interval: BootInterval,
    now: datetime,
    shutdown_grace: timedelta | None = None,
) -> list[PowerEvent]:
    """Boot at the interval start, plus a shutdown when the boot has really ended.

    The running boot reports "now" as its last entry, so an end within the
    grace period of ``now`` is not a shutdown.
    """
    grace = shutdown_grace if shutdown_grace is not None else timedelta(seconds=config.SHUTDOWN_GRACE_SECONDS)
    events = [PowerEvent(timestamp=interval.start, kind=EventKind.BOOT)]
    if interval.end < now - grace:
        events.append(PowerEvent(timestamp=interval.end, kind=EventKind.SHUTDOWN))
    return events


def parse_boot_list(
    text: str,
    now: datetime,
    shutdown_grace: timedelta | None = None,
) -> list[PowerEvent]:
    events: list[PowerEvent] = []
    for interval in parse_boot_intervals(text):
        events.extend(boot_interval_events(interval, now, shutdown_grace))
    return events
