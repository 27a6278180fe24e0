"""
Pure helpers shared by the worklog services.
"""

from worklogr.utils.dates import WeekInMonth, month_range, week_range, weeks_in_month
from worklogr.utils.dedupe import dedupe_by_key
from worklogr.utils.duration import ms_to_string

__all__ = [
    "WeekInMonth",
    "weeks_in_month",
    "month_range",
    "week_range",
    "dedupe_by_key",
    "ms_to_string",
]
