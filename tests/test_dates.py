"""
Tests for date utilities and the day-count engine.
"""

from datetime import date, datetime

import pytest
from opendate import Date

from ficore import DayCountConvention, ValidationError
from ficore import days_between, time_in_years, to_date, year_fraction
from ficore.dates import add_months, add_years


class TestToDate:
    """Tests for date coercion."""

    def test_iso_string(self):
        """ISO strings parse to opendate.Date."""
        d = to_date('2025-01-15')
        assert isinstance(d, Date)
        assert (d.year, d.month, d.day) == (2025, 1, 15)

    def test_stdlib_date(self):
        """Standard library dates are converted."""
        d = to_date(date(2025, 6, 30))
        assert d == Date(2025, 6, 30)

    def test_datetime_drops_time(self):
        """Datetimes keep only their date."""
        d = to_date(datetime(2025, 6, 30, 15, 45))
        assert d == Date(2025, 6, 30)

    def test_opendate_passthrough(self):
        """An opendate.Date is returned unchanged."""
        d = Date(2025, 1, 15)
        assert to_date(d) is d

    def test_rejects_other_types(self):
        """Numbers are not dates."""
        with pytest.raises(TypeError):
            to_date(20250115)


class TestDaysBetween:
    """Tests for actual day counting."""

    def test_leap_year(self):
        """2024 has 366 days."""
        assert days_between('2024-01-01', '2025-01-01') == 366

    def test_same_day(self):
        """Zero days between a date and itself."""
        assert days_between('2025-01-15', '2025-01-15') == 0

    def test_negative(self):
        """Reversed dates give a negative count."""
        assert days_between('2025-04-01', '2025-01-01') == -90


class TestYearFraction:
    """Tests for year fractions under each convention."""

    def test_act_360(self):
        """ACT/360 divides actual days by 360."""
        yf = year_fraction(Date(2020, 1, 1), Date(2020, 4, 1), DayCountConvention.ACT_360)
        assert abs(yf - 91 / 360) < 1e-12

    def test_act_365(self):
        """ACT/365 divides actual days by 365."""
        yf = year_fraction(Date(2020, 1, 1), Date(2020, 4, 1), DayCountConvention.ACT_365)
        assert abs(yf - 91 / 365) < 1e-12

    def test_act_act_uses_365(self):
        """ACT/ACT divides by 365 even across a leap year."""
        yf = year_fraction(Date(2020, 1, 1), Date(2021, 1, 1), DayCountConvention.ACT_ACT)
        assert abs(yf - 366 / 365) < 1e-12

    def test_thirty_360_counts_actual_days(self):
        """30/360 counts actual days over 360."""
        yf = year_fraction(Date(2020, 1, 15), Date(2020, 3, 15), DayCountConvention.THIRTY_360)
        assert abs(yf - 60 / 360) < 1e-12

    def test_string_convention(self):
        """Conventions may be given as text."""
        yf = year_fraction('2020-01-01', '2020-04-01', 'act/360')
        assert abs(yf - 91 / 360) < 1e-12

    def test_unknown_convention(self):
        """Unknown conventions are rejected."""
        with pytest.raises(ValidationError):
            year_fraction('2020-01-01', '2020-04-01', 'BUS/252')

    def test_default_is_act_365(self):
        """Without a convention, ACT/365 applies."""
        assert abs(year_fraction('2025-01-01', '2026-01-01') - 1.0) < 1e-12


class TestTimeInYears:
    """Tests for discounting time."""

    def test_always_365(self):
        """Discounting time ignores any day count convention."""
        assert abs(time_in_years('2024-01-01', '2025-01-01') - 366 / 365) < 1e-12

    def test_past_date_negative(self):
        """Dates before valuation give negative time."""
        assert time_in_years('2025-01-15', '2025-01-14') < 0


class TestMonthArithmetic:
    """Tests for month stepping."""

    def test_end_of_month_clamp(self):
        """Jan 31 + 1 month clamps to Feb 29 in a leap year."""
        assert add_months(Date(2024, 1, 31), 1) == Date(2024, 2, 29)

    def test_year_rollover(self):
        """Month addition carries into the next year."""
        assert add_months(Date(2024, 11, 15), 3) == Date(2025, 2, 15)

    def test_subtract(self):
        """Negative months step backwards."""
        assert add_months(Date(2025, 3, 31), -1) == Date(2025, 2, 28)

    def test_add_years_leap_day(self):
        """Feb 29 + 1 year clamps to Feb 28."""
        assert add_years(Date(2024, 2, 29), 1) == Date(2025, 2, 28)
