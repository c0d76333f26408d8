"""Chronological ordering and near-duplicate collapsing for power events."""
from __future__ import annotations

from datetime import timedelta
from typing import Iterable

from powerlog import config
from powerlog.models import PowerEvent


def sort_events(events: Iterable[PowerEvent]) -> list[PowerEvent]:
    return sorted(events, key=lambda event: event.timestamp)


def deduplicate_events(events: list[PowerEvent], window: timedelta | None = None) -> list[PowerEvent]:
    """Drop repeats of the previously kept event's kind logged within ``window`` of it.

    Expects chronologically sorted input. The first event is always kept.
    """
    if not events:
        return []
    window = window if window is not None else timedelta(seconds=config.DEDUP_WINDOW_SECONDS)

    kept = [events[0]]
    for event in events[1:]:
        last = kept[-1]
        if event.kind == last.kind and event.timestamp - last.timestamp < window:
            continue
        kept.append(event)
    return kept


def normalize_events(events: Iterable[PowerEvent], window: timedelta | None = None) -> list[PowerEvent]:
    return deduplicate_events(sort_events(events), window)
