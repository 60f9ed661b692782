"""
Wall-clock collaborator.

Everything in the core that needs "now" or calendar-day arithmetic takes a
Clock so tests can pin time.
"""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from typing import Union

DateLike = Union[date, datetime]


class Clock:
    """
    System clock with calendar-day helpers.

    Days are evaluated in ``tz`` (UTC by default).
    """

    def __init__(self, tz: tzinfo = timezone.utc):
        self.tz = tz

    def now(self) -> datetime:
        """Current time as an aware datetime."""
        return datetime.now(self.tz)

    def today(self) -> date:
        return self.start_of_day(self.now())

    def start_of_day(self, moment: DateLike) -> date:
        """Calendar day a timestamp falls on."""
        if isinstance(moment, datetime):
            if moment.tzinfo is not None:
                moment = moment.astimezone(self.tz)
            return moment.date()
        return moment

    def days_between(self, earlier: DateLike, later: DateLike) -> int:
        """Whole calendar days from ``earlier`` to ``later`` (negative if reversed)."""
        return (self.start_of_day(later) - self.start_of_day(earlier)).days

    def is_same_day(self, a: DateLike, b: DateLike) -> bool:
        return self.days_between(a, b) == 0

    def is_consecutive_day(self, earlier: DateLike, later: DateLike) -> bool:
        return self.days_between(earlier, later) == 1


SystemClock = Clock
