"""End-to-end timeline reconstruction: journal text in, report out."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional, Sequence

from powerlog.date_utils import local_now
from powerlog.journal import JournalRetrievalError, LogProvider
from powerlog.models import TimelineReport
from powerlog.normalizer import normalize_events
from powerlog.observability import start_span
from powerlog.parsers import UnitRule, default_unit_rules, extract_events
from powerlog.reconstructor import reconstruct_sessions
from powerlog.summary import summarize

logger = logging.getLogger("powerlog.pipeline")


def _fetch_unit_texts(
    provider: LogProvider,
    rules: Sequence[UnitRule],
    boot_id: Optional[str],
) -> list[tuple[UnitRule, str]]:
    texts: list[tuple[UnitRule, str]] = []
    for rule in rules:
        try:
            text = provider.fetch_unit_history(rule.unit, boot_id)
        except JournalRetrievalError as exc:
            # Sleep history may be empty or unsupported; the run continues without it.
            logger.warning("No %s history available: %s", rule.unit, exc)
            continue
        texts.append((rule, text))
    return texts


def build_timeline(
    provider: LogProvider,
    now: Optional[datetime] = None,
    boot_id: Optional[str] = None,
    unit_rules: Optional[Sequence[UnitRule]] = None,
    shutdown_grace: Optional[timedelta] = None,
    dedup_window: Optional[timedelta] = None,
) -> TimelineReport:
    """Reconstruct power sessions from the journal.

    ``now`` is captured once and used both to tell the running boot from a
    finished one and to end a still-active session. A failing boot listing
    raises :class:`JournalRetrievalError`; failing unit queries count as empty.
    """
    now = now or local_now()
    rules = list(unit_rules) if unit_rules is not None else default_unit_rules()

    with start_span("powerlog.retrieve", {"boot_id": boot_id}):
        boot_text = provider.fetch_boot_intervals()
        unit_texts = _fetch_unit_texts(provider, rules, boot_id)

    with start_span("powerlog.extract"):
        raw_events = extract_events(boot_text, unit_texts, now, shutdown_grace)

    with start_span("powerlog.normalize", {"raw_events": len(raw_events)}):
        events = normalize_events(raw_events, dedup_window)
    logger.info("Extracted %d event(s), %d after normalization", len(raw_events), len(events))

    if not events:
        return TimelineReport(status="no_events", generatedAt=now)

    with start_span("powerlog.reconstruct", {"events": len(events)}):
        sessions = reconstruct_sessions(events, now)

    if not sessions:
        return TimelineReport(status="no_sessions", generatedAt=now, events=events)

    return TimelineReport(
        status="ok",
        generatedAt=now,
        events=events,
        sessions=sessions,
        summary=summarize(sessions),
    )
