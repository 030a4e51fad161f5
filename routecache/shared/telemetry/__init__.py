"""Shared telemetry: logging setup."""

from routecache.shared.telemetry.logging import setup_logging

__all__ = ["setup_logging"]
