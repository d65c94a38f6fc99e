"""
ReportWindow -- inclusive time window for the earnings reports.

A report is asked for "between start and end" where either bound may be a
calendar date or a timestamp.  A date start means the first instant of
that day; a date end covers the whole day, so it becomes an exclusive
bound at the next midnight.  Naive timestamps are taken as UTC.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

from freelance_kernel.domain.clock import as_utc
from freelance_kernel.exceptions import InvalidDateRangeError


def _start_of(value: date) -> datetime:
    if isinstance(value, datetime):
        return as_utc(value)
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


@dataclass(frozen=True)
class ReportWindow:
    """Normalized [lower, upper] bounds in UTC."""

    lower: datetime
    upper: datetime
    upper_inclusive: bool
    start_label: str
    end_label: str

    @classmethod
    def between(cls, start: date, end: date) -> ReportWindow:
        """
        Build a window from user-facing bounds.

        Raises:
            InvalidDateRangeError: start lies after end.
            TypeError: a bound is not a date or datetime.
        """
        for bound in (start, end):
            if not isinstance(bound, date):
                raise TypeError(f"Report bounds must be date or datetime, got {bound!r}")

        lower = _start_of(start)
        if isinstance(end, datetime):
            upper = as_utc(end)
            upper_inclusive = True
            is_empty = lower > upper
        else:
            upper = _start_of(end) + timedelta(days=1)
            upper_inclusive = False
            is_empty = lower >= upper

        if is_empty:
            raise InvalidDateRangeError(start.isoformat(), end.isoformat())

        return cls(
            lower=lower,
            upper=upper,
            upper_inclusive=upper_inclusive,
            start_label=start.isoformat(),
            end_label=end.isoformat(),
        )
