"""
Date utilities and the day-count engine.

Uses opendate.Date as the primary date type. Two time bases coexist:
year_fraction() sizes accruals under a day count convention, while
time_in_years() measures discounting time as actual days over 365.
"""

from datetime import date, datetime
from typing import Union

from opendate import Date

from .config import DAYS_PER_YEAR
from .enums import DayCountConvention

# Accept various date-like inputs
DateLike = Union[Date, date, datetime, str]


def to_date(d: DateLike) -> Date:
    """Convert any date-like input to opendate.Date."""
    if isinstance(d, Date):
        return d
    if isinstance(d, datetime):
        return Date.instance(d.date())
    if isinstance(d, date):
        return Date.instance(d)
    if isinstance(d, str):
        result = Date.parse(d)
        if result is None:
            raise ValueError(f'Cannot parse date: {d}')
        return result
    raise TypeError(f'Expected Date, date, datetime, or string, got {type(d)}')


def days_between(start: DateLike, end: DateLike) -> int:
    """Actual calendar days from start to end (negative if end < start)."""
    d1 = to_date(start)
    d2 = to_date(end)
    if d2 < d1:
        return -(d1 - d2).days
    return (d2 - d1).days


def year_fraction(
    start: DateLike,
    end: DateLike,
    convention: DayCountConvention | str = DayCountConvention.ACT_365,
) -> float:
    """
    Calculate the year fraction between two dates.

    ACT/ACT and ACT/365 divide actual days by 365; ACT/360 and 30/360
    divide actual days by 360. 30/360 counts actual days, not date components.

    Args:
        start: Start date
        end: End date
        convention: Day count convention to use

    Returns
        Year fraction as a float
    """
    if isinstance(convention, str):
        convention = DayCountConvention.from_string(convention)
    return days_between(start, end) / convention.denominator


def time_in_years(valuation_date: DateLike, d: DateLike) -> float:
    """Discounting time from valuation date to d: actual days / 365."""
    return days_between(valuation_date, d) / DAYS_PER_YEAR


def add_months(d: DateLike, months: int) -> Date:
    """Add months to a date, clamping to the last day of the target month."""
    od = to_date(d)
    return od.add(months=months) if months >= 0 else od.subtract(months=-months)


def add_years(d: DateLike, years: int) -> Date:
    """Add years to a date."""
    return add_months(d, 12 * years)
