"""Parse systemd unit activation lines for suspend and hibernate."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from powerlog import config
from powerlog.models import EventKind, PowerEvent
from powerlog.observability import record_skipped_line
from powerlog.parsers.registry import SourceKind, rule_for

logger = logging.getLogger("powerlog.parsers.units")


@dataclass(frozen=True)
class UnitRule:
    """How one sleep unit's start/finish lines map onto event kinds."""

    unit: str
    phrase: str
    start_kind: EventKind

    def classify(self, line: str) -> EventKind | None:
        if f"Finished {self.phrase}" in line:
            return EventKind.RESUME
        if f"Starting {self.phrase}" in line:
            return self.start_kind
        return None


def suspend_rule(unit: str | None = None) -> UnitRule:
    return UnitRule(unit=unit or config.SUSPEND_UNIT, phrase="System Suspend", start_kind=EventKind.SUSPEND)


def hibernate_rule(unit: str | None = None) -> UnitRule:
    return UnitRule(unit=unit or config.HIBERNATE_UNIT, phrase="System Hibernate", start_kind=EventKind.HIBERNATE)


def default_unit_rules() -> list[UnitRule]:
    return [suspend_rule(), hibernate_rule()]


def parse_unit_history(text: str, rule: UnitRule) -> list[PowerEvent]:
    """Turn `journalctl -u <unit> -o short-iso` output into sleep/resume events."""
    timestamp_rule = rule_for(SourceKind.UNIT_HISTORY)
    events: list[PowerEvent] = []
    for line in (text or "").splitlines():
        if rule.phrase not in line:
            continue

        matches = timestamp_rule.find(line)
        timestamp = timestamp_rule.parse(matches[0]) if matches else None
        if timestamp is None:
            logger.debug("Skipping %s line without a usable timestamp: %r", rule.unit, line)
            record_skipped_line(SourceKind.UNIT_HISTORY.value)
            continue

        kind = rule.classify(line)
        if kind is None:
            continue
        events.append(PowerEvent(timestamp=timestamp, kind=kind))
    return events
