import unittest
from datetime import datetime, timedelta, timezone

from powerlog.models import EventKind, PowerEvent
from powerlog.reconstructor import CLOSED, Closed, Open, finalize, reconstruct_sessions, transition


def _at(hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 1, 1, hour, minute, tzinfo=timezone.utc)


def _event(hour: int, minute: int, kind: EventKind) -> PowerEvent:
    return PowerEvent(timestamp=_at(hour, minute), kind=kind)


class TransitionTests(unittest.TestCase):
    def test_opener_while_closed_opens(self) -> None:
        state, session = transition(CLOSED, _event(8, 0, EventKind.BOOT))

        self.assertEqual(state, Open(since=_at(8), kind=EventKind.BOOT))
        self.assertIsNone(session)

    def test_closer_while_open_emits_and_closes(self) -> None:
        state, session = transition(Open(since=_at(8), kind=EventKind.RESUME), _event(9, 0, EventKind.SUSPEND))

        self.assertIsInstance(state, Closed)
        assert session is not None
        self.assertEqual(session.label, "resume → suspend")
        self.assertEqual(session.duration, timedelta(hours=1))
        self.assertFalse(session.anomaly)

    def test_opener_while_open_is_an_anomaly_and_reopens(self) -> None:
        state, session = transition(Open(since=_at(8), kind=EventKind.BOOT), _event(9, 0, EventKind.RESUME))

        self.assertEqual(state, Open(since=_at(9), kind=EventKind.RESUME))
        assert session is not None
        self.assertTrue(session.anomaly)
        self.assertEqual(session.label, "boot → resume")
        self.assertEqual((session.start, session.end), (_at(8), _at(9)))

    def test_closer_while_closed_is_ignored(self) -> None:
        for kind in (EventKind.SHUTDOWN, EventKind.SUSPEND, EventKind.HIBERNATE):
            state, session = transition(CLOSED, _event(9, 0, kind))
            self.assertIsInstance(state, Closed)
            self.assertIsNone(session)

    def test_finalize(self) -> None:
        self.assertIsNone(finalize(CLOSED, _at(12)))

        tail = finalize(Open(since=_at(8), kind=EventKind.BOOT), _at(12))

        assert tail is not None
        self.assertTrue(tail.stillActive)
        self.assertEqual(tail.label, "boot → (still active)")
        self.assertEqual(tail.end, _at(12))


class ReconstructSessionsTests(unittest.TestCase):
    def test_boot_then_shutdown(self) -> None:
        sessions = reconstruct_sessions(
            [_event(8, 0, EventKind.BOOT), _event(18, 0, EventKind.SHUTDOWN)],
            now=_at(20),
        )

        self.assertEqual(len(sessions), 1)
        self.assertEqual(sessions[0].label, "boot → shutdown")
        self.assertEqual(sessions[0].duration, timedelta(hours=10))

    def test_boot_without_closer_is_still_active_until_now(self) -> None:
        now = datetime(2025, 1, 1, 18, 0, 30, tzinfo=timezone.utc)

        sessions = reconstruct_sessions([_event(8, 0, EventKind.BOOT)], now=now)

        self.assertEqual(len(sessions), 1)
        self.assertEqual(sessions[0].label, "boot → (still active)")
        self.assertEqual((sessions[0].start, sessions[0].end), (_at(8), now))

    def test_closed_after_suspend_leaves_no_tail(self) -> None:
        sessions = reconstruct_sessions(
            [_event(8, 0, EventKind.BOOT), _event(9, 0, EventKind.SUSPEND)],
            now=_at(12),
        )

        self.assertEqual([s.label for s in sessions], ["boot → suspend"])

    def test_boot_then_resume_anomaly_keeps_new_session_open(self) -> None:
        sessions = reconstruct_sessions(
            [_event(8, 0, EventKind.BOOT), _event(9, 0, EventKind.RESUME)],
            now=_at(12),
        )

        self.assertEqual([s.label for s in sessions], ["boot → resume", "resume → (still active)"])
        self.assertTrue(sessions[0].anomaly)
        self.assertEqual(sessions[1].start, _at(9))

    def test_leading_closers_are_ignored(self) -> None:
        sessions = reconstruct_sessions(
            [_event(7, 0, EventKind.SUSPEND), _event(7, 30, EventKind.SHUTDOWN)],
            now=_at(12),
        )

        self.assertEqual(sessions, [])

    def test_full_day_with_every_kind(self) -> None:
        events = [
            _event(7, 0, EventKind.SHUTDOWN),
            _event(8, 0, EventKind.BOOT),
            _event(9, 0, EventKind.SUSPEND),
            _event(9, 30, EventKind.RESUME),
            _event(12, 0, EventKind.HIBERNATE),
            _event(13, 0, EventKind.RESUME),
            _event(14, 0, EventKind.BOOT),
            _event(17, 0, EventKind.SHUTDOWN),
            _event(18, 0, EventKind.BOOT),
        ]

        sessions = reconstruct_sessions(events, now=_at(19))

        self.assertEqual(
            [s.label for s in sessions],
            [
                "boot → suspend",
                "resume → hibernate",
                "resume → boot",
                "boot → shutdown",
                "boot → (still active)",
            ],
        )
        openers = [e for e in events if e.kind.is_opener]
        self.assertEqual(len(sessions), len(openers))
        self.assertEqual(sum(1 for s in sessions if s.stillActive), 1)
        self.assertTrue(sessions[-1].stillActive)
        for session in sessions:
            self.assertGreaterEqual(session.end, session.start)

    def test_now_before_last_opener_yields_zero_length_tail(self) -> None:
        sessions = reconstruct_sessions([_event(8, 0, EventKind.BOOT)], now=_at(7, 59))

        self.assertEqual(sessions[0].duration, timedelta(0))


if __name__ == "__main__":
    unittest.main()
