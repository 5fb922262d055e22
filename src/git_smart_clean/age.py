"""Relative age labels and colour bands for commit timestamps."""

from datetime import datetime, timedelta
from enum import Enum

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR

# Largest unit first
_UNITS = (
    ("year", 365 * _DAY),
    ("month", 30 * _DAY),
    ("week", 7 * _DAY),
    ("day", _DAY),
    ("hour", _HOUR),
    ("minute", _MINUTE),
)

AGING_AFTER_DAYS = 30
STALE_AFTER_DAYS = 90


class AgeBand(Enum):
    """How old a branch looks at a glance."""

    FRESH = "fresh"
    AGING = "aging"
    STALE = "stale"


def elapsed_seconds(now: datetime, commit_time: datetime) -> int:
    """Whole seconds between two instants, clamped to zero for future commits."""
    return max(0, int((now - commit_time) // timedelta(seconds=1)))


def relative_label(seconds: int) -> str:
    """Format elapsed seconds as e.g. ``"3 days ago"`` or ``"just now"``."""
    for unit, size in _UNITS:
        count = seconds // size
        if count > 0:
            return f"{count} {unit if count == 1 else unit + 's'} ago"
    return "just now"


def band_for(seconds: int) -> AgeBand:
    """Colour band for elapsed seconds.

    Compares whole elapsed days, not raw elapsed time: 30 days and 23 hours is
    still 30 days and so FRESH, and AGING starts at 31 whole days.
    """
    days = seconds // _DAY
    if days > STALE_AFTER_DAYS:
        return AgeBand.STALE
    if days > AGING_AFTER_DAYS:
        return AgeBand.AGING
    return AgeBand.FRESH


def classify(now: datetime, commit_time: datetime) -> tuple[str, AgeBand]:
    """Classify a commit timestamp relative to ``now``.

    Args:
        now: Reference instant, captured once per run
        commit_time: Commit instant. Later than ``now`` is treated as ``now``.

    Returns:
        Tuple of (relative label, age band)
    """
    seconds = elapsed_seconds(now, commit_time)
    return relative_label(seconds), band_for(seconds)
