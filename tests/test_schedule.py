"""
Tests for payment schedule generation.
"""

import pytest
from opendate import Date

from ficore import DayCountConvention, InvalidPeriodError, PaymentFrequency
from ficore import PaymentSchedule, ScheduleError, generate_schedule, months_per_period


class TestMonthsPerPeriod:
    """Tests for period length."""

    @pytest.mark.parametrize(('frequency', 'months'), [(1, 12), (2, 6), (4, 3), (12, 1), (3, 4)])
    def test_divisors_of_twelve(self, frequency, months):
        """Valid frequencies map to whole months."""
        assert months_per_period(frequency) == months

    def test_enum(self):
        """PaymentFrequency members are accepted."""
        assert months_per_period(PaymentFrequency.QUARTERLY) == 3

    @pytest.mark.parametrize('frequency', [0, -2, 5, 7, 24])
    def test_invalid(self, frequency):
        """Frequencies that do not divide 12 are rejected."""
        with pytest.raises(InvalidPeriodError):
            months_per_period(frequency)


class TestGenerateSchedule:
    """Tests for payment date generation."""

    def test_semi_annual_ten_year(self):
        """A 10Y semi-annual bond has 20 payment dates."""
        dates = generate_schedule('2025-01-15', '2035-01-15', 2)
        assert len(dates) == 20
        assert dates[0] == Date(2025, 7, 15)
        assert dates[-1] == Date(2035, 1, 15)

    def test_strictly_increasing(self):
        """Dates are strictly increasing and all after the start."""
        dates = generate_schedule('2025-01-15', '2030-01-15', 4)
        assert all(a < b for a, b in zip(dates, dates[1:]))
        assert dates[0] > Date(2025, 1, 15)

    def test_end_not_duplicated(self):
        """A regular end date appears once."""
        dates = generate_schedule('2025-01-15', '2026-01-15', 2)
        assert dates == [Date(2025, 7, 15), Date(2026, 1, 15)]

    def test_short_final_stub(self):
        """An irregular end date closes the schedule."""
        dates = generate_schedule('2025-01-15', '2025-12-01', 4)
        assert dates == [
            Date(2025, 4, 15),
            Date(2025, 7, 15),
            Date(2025, 10, 15),
            Date(2025, 12, 1),
        ]

    def test_month_end_clamp_leap_year(self):
        """A month-end start clamps in short months without drifting."""
        dates = generate_schedule('2024-01-31', '2024-07-31', 12)
        assert dates == [
            Date(2024, 2, 29),
            Date(2024, 3, 31),
            Date(2024, 4, 30),
            Date(2024, 5, 31),
            Date(2024, 6, 30),
            Date(2024, 7, 31),
        ]

    def test_month_end_non_leap_year(self):
        """Feb 28 is used outside leap years."""
        dates = generate_schedule('2025-01-31', '2025-03-31', 12)
        assert dates == [Date(2025, 2, 28), Date(2025, 3, 31)]

    def test_roll_day(self):
        """A roll day pins every regular date to that day of month."""
        dates = generate_schedule('2025-01-15', '2025-12-20', 4, roll_day=20)
        assert dates == [
            Date(2025, 4, 20),
            Date(2025, 7, 20),
            Date(2025, 10, 20),
            Date(2025, 12, 20),
        ]

    def test_roll_day_clamped(self):
        """Roll day 31 clamps to the month end."""
        dates = generate_schedule('2025-01-31', '2025-07-31', 4, roll_day=31)
        assert dates == [Date(2025, 4, 30), Date(2025, 7, 31)]

    def test_roll_day_clamped_leap_february(self):
        """Roll day 31 lands on Feb 29 in a leap year."""
        dates = generate_schedule('2024-01-31', '2024-03-31', 12, roll_day=31)
        assert dates == [Date(2024, 2, 29), Date(2024, 3, 31)]

    def test_end_before_start(self):
        """End must be after start."""
        with pytest.raises(ScheduleError):
            generate_schedule('2025-01-15', '2025-01-15', 2)

    def test_invalid_roll_day(self):
        """Roll days outside 1..31 are rejected."""
        with pytest.raises(ScheduleError):
            generate_schedule('2025-01-15', '2026-01-15', 2, roll_day=0)

    def test_invalid_frequency(self):
        """Invalid frequency surfaces as InvalidPeriodError."""
        with pytest.raises(InvalidPeriodError):
            generate_schedule('2025-01-15', '2026-01-15', 5)


class TestPaymentSchedule:
    """Tests for the PaymentSchedule class."""

    def test_periods_chain(self):
        """Each period starts where the previous one ended."""
        schedule = PaymentSchedule('2025-01-15', '2027-01-15', 2)
        assert schedule[0].accrual_start == Date(2025, 1, 15)
        for prev, cur in zip(schedule.periods, schedule.periods[1:]):
            assert cur.accrual_start == prev.accrual_end

    def test_year_fraction_uses_day_count(self):
        """Year fractions follow the schedule's convention."""
        schedule = PaymentSchedule('2025-03-20', '2025-09-20', 4,
                                   DayCountConvention.ACT_360, roll_day=20)
        first = schedule[0]
        assert first.accrual_days == 92
        assert abs(first.year_fraction - 92 / 360) < 1e-12

    def test_payment_dates(self):
        """Payment dates equal the accrual end dates."""
        schedule = PaymentSchedule('2025-01-15', '2026-01-15', 2)
        assert schedule.payment_dates == [p.payment_date for p in schedule]
        assert len(schedule) == 2

    def test_period_containing(self):
        """The containing period is half-open at its end."""
        schedule = PaymentSchedule('2025-01-15', '2026-01-15', 2)
        assert schedule.period_containing('2025-03-01').accrual_start == Date(2025, 1, 15)
        assert schedule.period_containing('2025-07-15').accrual_start == Date(2025, 7, 15)
        assert schedule.period_containing('2026-01-15') is None
        assert schedule.period_containing('2024-12-31') is None
