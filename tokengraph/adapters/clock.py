"""
System clock adapter.
"""

from datetime import UTC, datetime


class SystemClock:
    """Implements ClockPort with the host clock."""

    def now(self) -> datetime:
        return datetime.now(UTC)
