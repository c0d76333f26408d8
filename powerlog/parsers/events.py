"""Combine all journal sources into one unordered event list."""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable

from powerlog.models import PowerEvent
from powerlog.parsers.boot_list import parse_boot_list
from powerlog.parsers.unit_history import UnitRule, parse_unit_history


def extract_events(
    boot_text: str,
    unit_texts: Iterable[tuple[UnitRule, str]],
    now: datetime,
    shutdown_grace: timedelta | None = None,
) -> list[PowerEvent]:
    events = parse_boot_list(boot_text, now, shutdown_grace)
    for rule, text in unit_texts:
        events.extend(parse_unit_history(text, rule))
    return events
