"""Observability helpers."""

from powerlog.observability.otel import (
    initialize,
    shutdown,
    start_span,
    record_retrieval,
    record_skipped_line,
    record_sessions,
)

__all__ = [
    "initialize",
    "shutdown",
    "start_span",
    "record_retrieval",
    "record_skipped_line",
    "record_sessions",
]
