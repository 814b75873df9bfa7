"""Clock Interface

Supplies "now" to use cases so that day boundaries, overdue checks and export
stamps can be evaluated at any instant in tests.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta

from libs.ph_calendar import PH_OFFSET, local_date


class Clock(ABC):
    """Source of the current instant"""

    @abstractmethod
    def now(self) -> datetime:
        """
        Current instant

        Returns:
            Aware datetime in UTC
        """
        pass

    def today(self, offset: timedelta = PH_OFFSET) -> date:
        """Current local calendar date in the given offset"""
        return local_date(self.now(), offset)
