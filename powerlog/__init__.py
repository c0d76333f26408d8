"""Reconstruct boot, sleep and resume sessions from the systemd journal."""

__version__ = "0.1.0"
