import unittest
from datetime import datetime, timedelta, timezone

from powerlog.models import EventKind, Session, TimelineReport
from powerlog.rendering import (
    NO_EVENTS_MESSAGE,
    NO_SESSIONS_MESSAGE,
    TITLE,
    format_duration,
    render_report,
    render_sessions,
    render_summary,
)
from powerlog.summary import summarize


def _at(hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 1, 1, hour, minute, tzinfo=timezone.utc)


class FormatDurationTests(unittest.TestCase):
    def test_magnitudes(self) -> None:
        self.assertEqual(format_duration(timedelta(hours=10)), "10h 0m 0s")
        self.assertEqual(format_duration(timedelta(hours=1, minutes=2, seconds=3)), "1h 2m 3s")
        self.assertEqual(format_duration(timedelta(minutes=5, seconds=7)), "5m 7s")
        self.assertEqual(format_duration(timedelta(seconds=42)), "42s")
        self.assertEqual(format_duration(timedelta(0)), "0s")

    def test_hours_exceed_a_day_and_fractions_truncate(self) -> None:
        self.assertEqual(format_duration(timedelta(days=2, hours=1, seconds=59.9)), "49h 0m 59s")


class RenderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.sessions = [
            Session(start=_at(8), end=_at(18), openKind=EventKind.BOOT, closeKind=EventKind.SHUTDOWN),
            Session(start=_at(19), end=_at(19, 30), openKind=EventKind.BOOT, closeKind=None),
        ]

    def test_session_table_layout(self) -> None:
        lines = render_sessions(self.sessions).splitlines()

        self.assertEqual(lines[0], "Computer work sessions:")
        self.assertEqual(lines[1], "")
        self.assertEqual(lines[2], f"{'Start':<25} | {'End':<25} | {'Uptime':<20} | Type")
        self.assertEqual(lines[3], "-" * 110)
        self.assertEqual(
            lines[4],
            f"{'2025-01-01 08:00:00':<25} | {'2025-01-01 18:00:00':<25} | {'10h 0m 0s':<20} | boot → shutdown",
        )
        self.assertTrue(lines[5].endswith(f"| {'30m 0s':<20} | boot → (still active)"))

    def test_summary_block(self) -> None:
        text = render_summary(summarize(self.sessions))

        self.assertIn("=== Summary ===", text)
        self.assertIn("Number of sessions: 2\n", text)
        self.assertIn("Total uptime: 10h 30m 0s\n", text)
        self.assertIn("Average session time: 5h 15m 0s\n", text)
        self.assertIn("Longest session: 10h 0m 0s (2025-01-01 08:00)\n", text)
        self.assertIn("Shortest session: 30m 0s (2025-01-01 19:00)\n", text)

    def test_report_variants(self) -> None:
        generated = _at(20)

        empty = render_report(TimelineReport(status="no_events", generatedAt=generated))
        self.assertEqual(empty, f"{TITLE}\n\n{NO_EVENTS_MESSAGE}\n")

        no_sessions = render_report(TimelineReport(status="no_sessions", generatedAt=generated))
        self.assertEqual(no_sessions, f"{TITLE}\n\n{NO_SESSIONS_MESSAGE}\n")

        full = render_report(
            TimelineReport(
                status="ok",
                generatedAt=generated,
                sessions=self.sessions,
                summary=summarize(self.sessions),
            )
        )
        self.assertTrue(full.startswith(f"{TITLE}\n\nComputer work sessions:\n"))
        self.assertIn("\n\n\n=== Summary ===\n", full)

    def test_times_render_in_their_own_offset(self) -> None:
        cet = timezone(timedelta(hours=1))
        session = Session(
            start=datetime(2025, 1, 1, 9, 0, tzinfo=cet),
            end=datetime(2025, 1, 1, 10, 0, tzinfo=cet),
            openKind=EventKind.RESUME,
            closeKind=EventKind.SUSPEND,
        )

        row = render_sessions([session]).splitlines()[4]

        self.assertTrue(row.startswith("2025-01-01 09:00:00"))

    def test_still_active_end_renders_in_start_offset(self) -> None:
        cet = timezone(timedelta(hours=1))
        session = Session(
            start=datetime(2025, 1, 6, 8, 0, tzinfo=cet),
            end=datetime(2025, 1, 6, 8, 0, 30, tzinfo=timezone.utc),
            openKind=EventKind.BOOT,
            closeKind=None,
        )

        row = render_sessions([session]).splitlines()[4]

        self.assertEqual(
            row,
            f"{'2025-01-06 08:00:00':<25} | {'2025-01-06 09:00:30':<25} | {'1h 0m 30s':<20} | boot → (still active)",
        )


if __name__ == "__main__":
    unittest.main()
