"""Shared service-layer helper functions."""

from __future__ import annotations

import time
from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current UTC time (patched in tests)."""
    return datetime.now(UTC)


def epoch_ns() -> int:
    """Current time as nanoseconds since the Unix epoch (patched in tests)."""
    return time.time_ns()
