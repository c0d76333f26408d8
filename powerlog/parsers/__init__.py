"""Journal record extractors."""

from powerlog.parsers.boot_list import boot_interval_events, parse_boot_intervals, parse_boot_list
from powerlog.parsers.events import extract_events
from powerlog.parsers.unit_history import (
    UnitRule,
    default_unit_rules,
    hibernate_rule,
    parse_unit_history,
    suspend_rule,
)

__all__ = [
    "UnitRule",
    "boot_interval_events",
    "default_unit_rules",
    "extract_events",
    "hibernate_rule",
    "parse_boot_intervals",
    "parse_boot_list",
    "parse_unit_history",
    "suspend_rule",
]
