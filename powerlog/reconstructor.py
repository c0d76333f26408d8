"""Session reconstruction state machine.

The machine is either ``Closed`` or ``Open`` since some opener event. Feeding
it one event at a time through :func:`transition` yields the next state and, at
most, one finished session:

=======  ==========================  ====================================
state    event                       result
=======  ==========================  ====================================
Closed   boot / resume               Open, nothing emitted
Open     boot / resume               anomaly session, re-opened at event
Open     shutdown/suspend/hibernate  closed session, Closed
Closed   shutdown/suspend/hibernate  ignored
=======  ==========================  ====================================

An anomaly is two openers in a row, e.g. a resume whose preceding suspend was
never logged. It still produces a session so no opener is lost.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Union

from powerlog.models import EventKind, PowerEvent, Session
from powerlog.observability import record_sessions

logger = logging.getLogger("powerlog.sessions")


@dataclass(frozen=True)
class Closed:
    pass


@dataclass(frozen=True)
class Open:
    since: datetime
    kind: EventKind


MachineState = Union[Closed, Open]

CLOSED = Closed()


def transition(state: MachineState, event: PowerEvent) -> tuple[MachineState, Optional[Session]]:
    if isinstance(state, Open):
        if event.kind.is_opener:
            session = Session(
                start=state.since,
                end=event.timestamp,
                openKind=state.kind,
                closeKind=event.kind,
                anomaly=True,
            )
            return Open(since=event.timestamp, kind=event.kind), session
        session = Session(start=state.since, end=event.timestamp, openKind=state.kind, closeKind=event.kind)
        return CLOSED, session

    if event.kind.is_opener:
        return Open(since=event.timestamp, kind=event.kind), None
    return CLOSED, None


def finalize(state: MachineState, now: datetime) -> Optional[Session]:
    """Close out a session still open when the stream ends, ending it at ``now``."""
    if not isinstance(state, Open):
        return None
    # Clock skew can put the last opener slightly after now.
    end = max(now, state.since)
    return Session(start=state.since, end=end, openKind=state.kind, closeKind=None)


def reconstruct_sessions(events: Iterable[PowerEvent], now: datetime) -> list[Session]:
    """Pair openers with closers over a chronologically sorted event stream."""
    sessions: list[Session] = []
    state: MachineState = CLOSED
    orphans = 0

    for event in events:
        if isinstance(state, Closed) and event.kind.is_closer:
            orphans += 1
            logger.debug("Ignoring %s at %s with no open session", event.kind.value, event.timestamp.isoformat())
        state, session = transition(state, event)
        if session is None:
            continue
        if session.anomaly:
            logger.info(
                "Improperly terminated session: %s at %s",
                session.label,
                session.end.isoformat(),
            )
        sessions.append(session)

    tail = finalize(state, now)
    if tail is not None:
        sessions.append(tail)

    if orphans:
        logger.debug("%d closer event(s) arrived with no open session", orphans)
    record_sessions("closed", sum(1 for s in sessions if not s.anomaly and not s.stillActive))
    record_sessions("anomaly", sum(1 for s in sessions if s.anomaly))
    record_sessions("still_active", 1 if tail is not None else 0)
    record_sessions("orphan_closer", orphans)
    return sessions
