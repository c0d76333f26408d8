#!/usr/bin/env python3
"""Print boot, suspend and resume sessions reconstructed from the journal.

Usage:
  python -m powerlog.scripts.boot_history
  python -m powerlog.scripts.boot_history --boot 3460c36536374bb48bb910bae80c34b6
  python -m powerlog.scripts.boot_history --json
"""
from __future__ import annotations

import argparse
import logging
import sys

from powerlog import config
from powerlog.journal import JournalProvider, JournalRetrievalError
from powerlog.observability import initialize as initialize_observability, shutdown as shutdown_observability
from powerlog.pipeline import build_timeline
from powerlog.rendering import render_report


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconstruct power sessions from the systemd journal.")
    parser.add_argument("--boot", default="", help="Only read suspend/hibernate history for this boot id")
    parser.add_argument("--json", action="store_true", help="Emit the report as JSON")
    parser.add_argument("--journalctl", default=config.JOURNALCTL_BIN, help="journalctl binary to run")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (repeat for debug output)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    levels = [logging.WARNING, logging.INFO, logging.DEBUG]
    logging.basicConfig(
        level=levels[min(len(levels) - 1, args.verbose)],
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    initialize_observability()

    provider = JournalProvider(binary=args.journalctl)
    try:
        report = build_timeline(provider, boot_id=args.boot or None)
    except JournalRetrievalError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        shutdown_observability()

    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        sys.stdout.write(render_report(report))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
