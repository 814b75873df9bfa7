"""Clock Implementations"""

from datetime import datetime, timezone
from src.app.services.clock import Clock


class SystemClock(Clock):
    """Wall-clock time in UTC"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """
    Clock frozen at a given instant

    Used by tests and by reports that must be evaluated "as of" a date.
    Naive instants are taken as UTC.
    """

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self.instant = instant.astimezone(timezone.utc)

    def now(self) -> datetime:
        return self.instant
