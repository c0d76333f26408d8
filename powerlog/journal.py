"""Read boot listings and unit histories from journalctl."""
from __future__ import annotations

import logging
import subprocess
import time
from typing import Optional, Protocol

from powerlog import config
from powerlog.observability import record_retrieval

logger = logging.getLogger("powerlog.journal")

BOOT_LIST_SOURCE = "boot-list"


class JournalRetrievalError(RuntimeError):
    """A journal query failed; ``source`` names which one."""

    def __init__(self, source: str, cause: str) -> None:
        super().__init__(f"cannot read {source}: {cause}")
        self.source = source
        self.cause = cause


class LogProvider(Protocol):
    def fetch_boot_intervals(self) -> str:
        ...

    def fetch_unit_history(self, unit: str, boot_id: Optional[str] = None) -> str:
        ...


class JournalProvider:
    """Runs journalctl and returns its raw text output."""

    def __init__(self, binary: str | None = None, timeout: float | None = None) -> None:
        self.binary = binary or config.JOURNALCTL_BIN
        self.timeout = timeout if timeout is not None else config.RETRIEVAL_TIMEOUT_SECONDS

    def _run(self, source: str, args: list[str], merge_stderr: bool = False) -> str:
        command = [self.binary, *args]
        started = time.perf_counter()
        try:
            result = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if merge_stderr else subprocess.PIPE,
                text=True,
                timeout=self.timeout or None,
                check=False,
            )
        except FileNotFoundError as exc:
            record_retrieval(source, "missing_binary", (time.perf_counter() - started) * 1000)
            raise JournalRetrievalError(source, f"{self.binary} not found") from exc
        except subprocess.TimeoutExpired as exc:
            record_retrieval(source, "timeout", (time.perf_counter() - started) * 1000)
            raise JournalRetrievalError(source, f"timed out after {self.timeout}s") from exc

        elapsed_ms = (time.perf_counter() - started) * 1000
        if result.returncode != 0:
            record_retrieval(source, "error", elapsed_ms)
            detail = (result.stderr or result.stdout or "").strip().splitlines()
            reason = detail[-1] if detail else "no output"
            raise JournalRetrievalError(source, f"exit status {result.returncode}: {reason}")

        record_retrieval(source, "success", elapsed_ms)
        logger.debug("%s returned %d bytes in %.1f ms", " ".join(command), len(result.stdout), elapsed_ms)
        return result.stdout

    def fetch_boot_intervals(self) -> str:
        return self._run(BOOT_LIST_SOURCE, ["--list-boots", "--no-pager", "--output=short-iso"])

    def fetch_unit_history(self, unit: str, boot_id: Optional[str] = None) -> str:
        args = ["--no-pager", "-o", "short-iso", "-u", unit]
        if boot_id:
            args[0:0] = ["-b", boot_id]
        return self._run(unit, args, merge_stderr=True)
