"""powerlog configuration."""
import os


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default

# Journal retrieval
JOURNALCTL_BIN = os.getenv("POWERLOG_JOURNALCTL", "journalctl")
RETRIEVAL_TIMEOUT_SECONDS = _env_int("POWERLOG_RETRIEVAL_TIMEOUT_SECONDS", 30)
SUSPEND_UNIT = os.getenv("POWERLOG_SUSPEND_UNIT", "systemd-suspend.service")
HIBERNATE_UNIT = os.getenv("POWERLOG_HIBERNATE_UNIT", "systemd-hibernate.service")

# Timeline tuning
# A boot whose last entry is this close to "now" is the running boot, not a shutdown.
SHUTDOWN_GRACE_SECONDS = _env_int("POWERLOG_SHUTDOWN_GRACE_SECONDS", 60)
DEDUP_WINDOW_SECONDS = _env_int("POWERLOG_DEDUP_WINDOW_SECONDS", 120)

# Logging
LOG_LEVEL = os.getenv("POWERLOG_LOG_LEVEL", "INFO").strip().upper() or "INFO"

# Observability
OTEL_ENABLED = _env_bool("POWERLOG_OTEL_ENABLED", False)
OTEL_ENDPOINT = os.getenv("POWERLOG_OTEL_ENDPOINT", "http://localhost:4318")
OTEL_SERVICE_NAME = os.getenv("POWERLOG_OTEL_SERVICE_NAME", "powerlog")
PROM_PORT = _env_int("POWERLOG_PROM_PORT", 9464)

# Server settings
HOST = os.getenv("POWERLOG_HOST", "127.0.0.1")
PORT = int(os.getenv("POWERLOG_PORT", "8000"))

# CORS
FRONTEND_ORIGIN = os.getenv("POWERLOG_FRONTEND_ORIGIN", "http://localhost:3000")
