"""Aggregate statistics over reconstructed sessions."""
from __future__ import annotations

from datetime import timedelta
from typing import Sequence

from powerlog.models import Session, SessionSummary


def summarize(sessions: Sequence[Session]) -> SessionSummary:
    """Totals, average, and longest/shortest session (first occurrence wins ties).

    Raises ``ValueError`` for an empty sequence; callers report "no sessions"
    before getting here.
    """
    if not sessions:
        raise ValueError("cannot summarize an empty session list")

    total = sum((session.duration for session in sessions), timedelta())
    longest = shortest = sessions[0]
    for session in sessions[1:]:
        if session.duration > longest.duration:
            longest = session
        if session.duration < shortest.duration:
            shortest = session

    return SessionSummary(
        count=len(sessions),
        total=total,
        average=total / len(sessions),
        longest=longest,
        shortest=shortest,
    )
