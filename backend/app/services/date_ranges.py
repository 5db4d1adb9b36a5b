"""
Report range resolution.

Maps the symbolic ranges the dashboard sends (today, yesterday, 7days, 30days)
to concrete host-local windows. Both bounds are inclusive.
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import List, Optional

from app.utils.timezone_helpers import end_of_day, local_now, start_of_day


class ReportRange(str, Enum):
    TODAY = "today"
    YESTERDAY = "yesterday"
    LAST_7_DAYS = "7days"
    LAST_30_DAYS = "30days"


class Granularity(str, Enum):
    HOURLY = "hourly"
    DAILY = "daily"


@dataclass(frozen=True)
class DateWindow:
    start: datetime
    end: datetime
    granularity: Granularity

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    def days(self) -> List[date]:
        """Calendar days covered by the window, oldest first."""
        first, last = self.start.date(), self.end.date()
        return [first + timedelta(days=n) for n in range((last - first).days + 1)]


LOOKBACK_DAYS = {
    ReportRange.LAST_7_DAYS: 7,
    ReportRange.LAST_30_DAYS: 30,
}


def resolve_range(report_range: ReportRange, now: Optional[datetime] = None) -> DateWindow:
    """Calculate the start and end instants for a range preset"""
    now = now or local_now()
    report_range = ReportRange(report_range)

    if report_range == ReportRange.TODAY:
        return DateWindow(start_of_day(now), end_of_day(now), Granularity.HOURLY)

    if report_range == ReportRange.YESTERDAY:
        yesterday = now - timedelta(days=1)
        return DateWindow(start_of_day(yesterday), end_of_day(yesterday), Granularity.HOURLY)

    lookback = LOOKBACK_DAYS[report_range]
    return DateWindow(
        start_of_day(now - timedelta(days=lookback)),
        end_of_day(now),
        Granularity.DAILY,
    )


def previous_window(window: DateWindow) -> DateWindow:
    """The window of equal calendar length immediately before the given one."""
    span_days = (window.end.date() - window.start.date()).days + 1
    shift = timedelta(days=span_days)
    return DateWindow(window.start - shift, window.end - shift, window.granularity)
