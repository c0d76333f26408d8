"""Plain-text rendering of session tables and summaries."""
from __future__ import annotations

from datetime import timedelta
from typing import Sequence

from powerlog.date_utils import format_clock, format_minute
from powerlog.models import Session, SessionSummary, TimelineReport

TITLE = "=== Computer Boot and Shutdown History ==="
NO_EVENTS_MESSAGE = "No system events found."
NO_SESSIONS_MESSAGE = "Cannot calculate work sessions."

_ROW_FORMAT = "{:<25} | {:<25} | {:<20} | {}"
_RULE = "-" * 110


def format_duration(value: timedelta) -> str:
    total = max(0, int(value.total_seconds()))
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def render_sessions(sessions: Sequence[Session]) -> str:
    lines = [
        "Computer work sessions:",
        "",
        _ROW_FORMAT.format("Start", "End", "Uptime", "Type"),
        _RULE,
    ]
    for session in sessions:
        lines.append(
            _ROW_FORMAT.format(
                format_clock(session.start),
                format_clock(session.end.astimezone(session.start.tzinfo)),
                format_duration(session.duration),
                session.label,
            )
        )
    lines.append("")
    return "\n".join(lines) + "\n"


def render_summary(summary: SessionSummary) -> str:
    lines = [
        "",
        "=== Summary ===",
        f"Number of sessions: {summary.count}",
        f"Total uptime: {format_duration(summary.total)}",
        f"Average session time: {format_duration(summary.average)}",
        "",
        f"Longest session: {format_duration(summary.longest.duration)} ({format_minute(summary.longest.start)})",
        f"Shortest session: {format_duration(summary.shortest.duration)} ({format_minute(summary.shortest.start)})",
    ]
    return "\n".join(lines) + "\n"


def render_report(report: TimelineReport) -> str:
    header = f"{TITLE}\n\n"
    if report.status == "no_events":
        return f"{header}{NO_EVENTS_MESSAGE}\n"
    if report.status == "no_sessions" or report.summary is None:
        return f"{header}{NO_SESSIONS_MESSAGE}\n"
    return header + render_sessions(report.sessions) + render_summary(report.summary)
