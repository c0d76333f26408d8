"""Timestamp rules for each journal source format.

Every source kind owns the pattern that locates its timestamps inside a line
and the layout used to turn a match into an aware datetime. Parsers look their
rule up here instead of carrying their own regexes.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable

from powerlog.date_utils import parse_iso_offset_timestamp, parse_weekday_timestamp


class SourceKind(str, Enum):
    BOOT_LIST = "boot-list"
    UNIT_HISTORY = "unit-history"


@dataclass(frozen=True)
class TimestampRule:
    pattern: re.Pattern[str]
    layout: Callable[[re.Match[str]], datetime | None]
    anchored: bool = False

    def find(self, line: str) -> list[re.Match[str]]:
        if self.anchored:
            match = self.pattern.match(line)
            return [match] if match else []
        return list(self.pattern.finditer(line))

    def parse(self, match: re.Match[str]) -> datetime | None:
        return self.layout(match)


# `Mon 2025-01-01 08:00:00 UTC`
_WEEKDAY_PHRASE = re.compile(r"\b(\w{3})\s+(\d{4}-\d{2}-\d{2})\s+(\d{2}:\d{2}:\d{2})\s+(\w+)")
# `2025-01-01T08:00:00+01:00` at line start
_ISO_PREFIX = re.compile(r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}[+-]\d{2}:?\d{2})")

TIMESTAMP_RULES: dict[SourceKind, TimestampRule] = {
    SourceKind.BOOT_LIST: TimestampRule(
        pattern=_WEEKDAY_PHRASE,
        layout=lambda m: parse_weekday_timestamp(m.group(1), m.group(2), m.group(3), m.group(4)),
    ),
    SourceKind.UNIT_HISTORY: TimestampRule(
        pattern=_ISO_PREFIX,
        layout=lambda m: parse_iso_offset_timestamp(m.group(1)),
        anchored=True,
    ),
}


def rule_for(source: SourceKind) -> TimestampRule:
    return TIMESTAMP_RULES[source]
