"""
Calendar math for worklog browsing and export.

Months are always 1-12 here. Day boundaries are naive local datetimes.
"""

import calendar
from dataclasses import dataclass
from datetime import datetime, time
from typing import List, Optional, Tuple

# Nominal number of days in a week bucket
WEEK_LENGTH = 7

# Last representable instant of a day at millisecond precision
END_OF_DAY = time(23, 59, 59, 999000)


@dataclass(frozen=True)
class WeekInMonth:
    """
    A week bucket inside one month.

    Attributes:
        start: First day-of-month (inclusive)
        end: Last day-of-month (inclusive)
    """

    start: int
    end: int

    def __contains__(self, day: int) -> bool:
        return self.start <= day <= self.end


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month {month!r}. Must be between 1 and 12")


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month."""
    _check_month(month)
    return calendar.monthrange(year, month)[1]


def _boundary(year: int, month: int, day: int, end_of_day: bool = False) -> datetime:
    """Build the datetime for a day boundary; the single place months become dates."""
    _check_month(month)
    start = datetime(year, month, day)
    if end_of_day:
        return datetime.combine(start.date(), END_OF_DAY)
    return start


def weeks_in_month(
    year: int,
    month: int,
    first_day_of_week: Optional[int] = None,
) -> List[WeekInMonth]:
    """
    Split a month into contiguous week buckets.

    The first week always starts on day 1. Without ``first_day_of_week``
    every week is seven days long except possibly the last one. With it
    (0=Monday .. 6=Sunday), the first week ends right before the next
    occurrence of that weekday so later weeks follow the calendar.

    Args:
        year: Calendar year
        month: Month 1-12
        first_day_of_week: Optional weekday the calendar weeks start on

    Returns:
        Ordered list of WeekInMonth covering every day exactly once
    """
    last_day = days_in_month(year, month)

    if first_day_of_week is None:
        end = WEEK_LENGTH
    else:
        if not 0 <= first_day_of_week <= 6:
            raise ValueError(
                f"Invalid first_day_of_week {first_day_of_week!r}. Must be between 0 and 6"
            )
        offset = (calendar.weekday(year, month, 1) - first_day_of_week) % WEEK_LENGTH
        end = WEEK_LENGTH - offset

    weeks = []
    start = 1
    while start <= last_day:
        end = min(end, last_day)
        weeks.append(WeekInMonth(start=start, end=end))
        start = end + 1
        end = start + WEEK_LENGTH - 1
    return weeks


def month_range(year: int, month: int) -> Tuple[datetime, datetime]:
    """Return the first and last instant of a month."""
    last_day = days_in_month(year, month)
    return _boundary(year, month, 1), _boundary(year, month, last_day, end_of_day=True)


def week_range(year: int, month: int, week: WeekInMonth) -> Tuple[datetime, datetime]:
    """
    Return the first and last instant of a week bucket.

    The end is clamped to the month's last day, so a week reaching past
    the end of a short month still yields a valid range.

    Raises:
        ValueError: If the month is invalid or the week is empty/out of the month
    """
    last_day = days_in_month(year, month)
    end = min(week.end, last_day)
    if week.start < 1 or week.start > end:
        raise ValueError(
            f"Week {week.start}-{week.end} lies outside {year}-{month:02d}"
        )
    return _boundary(year, month, week.start), _boundary(year, month, end, end_of_day=True)
