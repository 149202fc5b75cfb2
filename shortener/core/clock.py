"""
Clock

Single wall-clock source shared by the registry (expiry) and the rate
limiter (sliding window). Both readings come from ``now()`` so the two
components never disagree about the current time. Tests pass their own
Clock subclass to control time.
"""

from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MILLISECOND = timedelta(milliseconds=1)


class Clock:
    """Wall clock returning timezone-aware UTC datetimes."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def epoch_millis(self) -> int:
        """Milliseconds since the Unix epoch for ``now()``."""
        return (self.now() - EPOCH) // ONE_MILLISECOND
