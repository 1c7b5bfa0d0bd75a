"""
Payment schedule generation.

Dates step forward from the start date in whole periods of 12/N months.
Each date is measured from the start anchor rather than from the previous
date, so a month-end start does not drift after a short month. The end
date always closes the schedule, even when it breaks the periodicity.
"""

from dataclasses import dataclass

from opendate import Date

from .dates import DateLike, add_months, days_between, to_date, year_fraction
from .enums import DayCountConvention, PaymentFrequency
from .exceptions import InvalidPeriodError, ScheduleError


def months_per_period(frequency: int | PaymentFrequency) -> int:
    """
    Months between payments for a frequency in periods per year.

    Raises
        InvalidPeriodError: If the frequency is not a positive divisor of 12
    """
    periods = frequency.value if isinstance(frequency, PaymentFrequency) else frequency
    if isinstance(periods, bool) or not isinstance(periods, int):
        raise InvalidPeriodError(frequency)
    if periods <= 0 or 12 % periods:
        raise InvalidPeriodError(frequency)
    return 12 // periods


def _roll(anchor: Date, months: int, roll_day: int | None) -> Date:
    """Step months from the anchor, optionally pinning the day of month."""
    d = add_months(anchor, months)
    if roll_day is None:
        return d
    return Date(d.year, d.month, min(roll_day, d.days_in_month))


def generate_schedule(
    start: DateLike,
    end: DateLike,
    frequency: int | PaymentFrequency,
    roll_day: int | None = None,
) -> list[Date]:
    """
    Generate payment dates after start, ending exactly at end.

    Args:
        start: Issue or accrual start date (not part of the result)
        end: Maturity date, always the last entry
        frequency: Payments per year; must divide 12
        roll_day: Pin every regular date to this day of month (clamped to
                  month end). None keeps the start date's day.

    Returns
        Strictly increasing list of payment dates

    Raises
        InvalidPeriodError: If frequency does not divide 12
        ScheduleError: If end is not after start or roll_day is out of range
    """
    step = months_per_period(frequency)
    d_start = to_date(start)
    d_end = to_date(end)

    if d_end <= d_start:
        raise ScheduleError(f'Schedule end {d_end} must be after start {d_start}')
    if roll_day is not None and not 1 <= roll_day <= 31:
        raise ScheduleError(f'Roll day must be within 1..31, got {roll_day}')

    dates = []
    k = 1
    while True:
        d = _roll(d_start, k * step, roll_day)
        if d >= d_end:
            break
        dates.append(d)
        k += 1

    dates.append(d_end)
    return dates


@dataclass(frozen=True)
class SchedulePeriod:
    """
    A single accrual period, paid on its end date.

    Attributes
        accrual_start: Start of accrual period
        accrual_end: End of accrual period and payment date
        accrual_days: Actual days in the period
        year_fraction: Accrual under the schedule's day count convention
    """

    accrual_start: Date
    accrual_end: Date
    accrual_days: int
    year_fraction: float

    @property
    def payment_date(self) -> Date:
        return self.accrual_end

    def __repr__(self) -> str:
        return (
            f'SchedulePeriod({self.accrual_start}, {self.accrual_end}, '
            f'days={self.accrual_days}, yf={self.year_fraction:.6f})'
        )


class PaymentSchedule:
    """
    A payment schedule with its accrual periods.

    The first period accrues from the start date; every later period from
    the previous payment date.
    """

    def __init__(
        self,
        start: DateLike,
        end: DateLike,
        frequency: int | PaymentFrequency = PaymentFrequency.SEMI_ANNUAL,
        day_count: DayCountConvention = DayCountConvention.ACT_ACT,
        roll_day: int | None = None,
    ):
        self.start = to_date(start)
        self.end = to_date(end)
        self.frequency = frequency
        self.day_count = day_count
        self.roll_day = roll_day

        self._dates = generate_schedule(self.start, self.end, frequency, roll_day)
        self._periods = self._build_periods()

    def _build_periods(self) -> list[SchedulePeriod]:
        periods = []
        previous = self.start
        for d in self._dates:
            periods.append(SchedulePeriod(
                accrual_start=previous,
                accrual_end=d,
                accrual_days=days_between(previous, d),
                year_fraction=year_fraction(previous, d, self.day_count),
            ))
            previous = d
        return periods

    @property
    def periods(self) -> list[SchedulePeriod]:
        """List of accrual periods."""
        return list(self._periods)

    @property
    def payment_dates(self) -> list[Date]:
        """Payment dates, the last one equal to the end date."""
        return list(self._dates)

    def period_containing(self, d: DateLike) -> SchedulePeriod | None:
        """The period with accrual_start <= d < accrual_end, if any."""
        od = to_date(d)
        for period in self._periods:
            if period.accrual_start <= od < period.accrual_end:
                return period
        return None

    def __len__(self) -> int:
        return len(self._periods)

    def __iter__(self):
        return iter(self._periods)

    def __getitem__(self, idx: int) -> SchedulePeriod:
        return self._periods[idx]
