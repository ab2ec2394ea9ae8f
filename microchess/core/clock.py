"""
Clock sources.

Generation stamps records with wall-clock time; tests substitute a fixed
clock so that whole records become reproducible.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    """
    ISO-8601 UTC with millisecond precision and a Z suffix.

    Example: 2024-05-01T12:00:00.000Z
    """
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def pgn_date(moment: datetime) -> str:
    """PGN Date tag value (YYYY.MM.DD)."""
    return moment.astimezone(timezone.utc).strftime("%Y.%m.%d")


class SystemClock:
    """Wall clock."""

    def now(self) -> datetime:
        return utc_now()


@dataclass(frozen=True)
class FixedClock:
    """
    Fixed time source.

    In tests: pin generation time so whole records are reproducible.
    """
    current: datetime = field(default_factory=lambda: datetime(2024, 1, 1, tzinfo=timezone.utc))

    def now(self) -> datetime:
        """Pinned time."""
        return self.current
