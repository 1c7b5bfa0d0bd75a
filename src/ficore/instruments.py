"""
Instrument terms.

Contract terms are immutable and validated when constructed, so malformed
data never reaches the valuation code.
"""

from dataclasses import dataclass

from opendate import Date

from .config import CDS_ROLL_DAY
from .dates import DateLike, add_months, time_in_years, to_date
from .enums import DayCountConvention, PaymentFrequency, Position
from .exceptions import InvalidPeriodError, ValidationError, check_finite
from .imm import next_imm_date, previous_imm_date
from .schedule import PaymentSchedule, months_per_period


def bps_to_decimal(bps: float) -> float:
    """Convert basis points to a decimal rate (250 -> 0.025)."""
    return bps / 10_000.0


def decimal_to_bps(rate: float) -> float:
    """Convert a decimal rate to basis points (0.025 -> 250)."""
    return rate * 10_000.0


@dataclass(frozen=True)
class InstrumentTerms:
    """
    Contractual terms shared by every fixed-rate instrument.

    Attributes
        identifier: Name used in error messages and logs
        notional: Face value or notional, > 0
        rate: Coupon or spread as a decimal, >= 0
        issue_date: Issue or accrual start date
        maturity_date: Final payment date, after issue_date
        frequency: Payments per year, a divisor of 12
        day_count: Convention used to size each accrual
        roll_day: Optional fixed day of month for payment dates
    """

    identifier: str
    notional: float
    rate: float
    issue_date: DateLike
    maturity_date: DateLike
    frequency: int = 2
    day_count: DayCountConvention = DayCountConvention.ACT_ACT
    roll_day: int | None = None

    def __post_init__(self):
        self._set('issue_date', self._coerce_date('issue_date', self.issue_date))
        self._set('maturity_date', self._coerce_date('maturity_date', self.maturity_date))

        if isinstance(self.day_count, str):
            self._set('day_count', self._parse(DayCountConvention, 'day_count', self.day_count))
        if not isinstance(self.day_count, DayCountConvention):
            raise ValidationError('day_count', self.day_count, 'not a day count convention',
                                  self.identifier)

        if isinstance(self.frequency, str):
            self._set('frequency', self._parse(PaymentFrequency, 'frequency', self.frequency))
        if isinstance(self.frequency, PaymentFrequency):
            self._set('frequency', self.frequency.value)
        try:
            months_per_period(self.frequency)
        except InvalidPeriodError:
            raise InvalidPeriodError(self.frequency, self.identifier) from None

        if self.maturity_date <= self.issue_date:
            raise ValidationError(
                'maturity_date', str(self.maturity_date),
                f'must be after issue date {self.issue_date}', self.identifier,
            )
        check_finite('notional', self.notional, self.identifier)
        check_finite('rate', self.rate, self.identifier)
        if not self.notional > 0:
            raise ValidationError('notional', self.notional, 'must be positive', self.identifier)
        if not self.rate >= 0:
            raise ValidationError('rate', self.rate, 'must be non-negative', self.identifier)
        if self.roll_day is not None and (
            isinstance(self.roll_day, bool) or not isinstance(self.roll_day, int)
            or not 1 <= self.roll_day <= 31
        ):
            raise ValidationError('roll_day', self.roll_day, 'must be a day within 1..31',
                                  self.identifier)

    def _set(self, name: str, value) -> None:
        object.__setattr__(self, name, value)

    def _coerce_date(self, name: str, value) -> Date:
        try:
            return to_date(value)
        except (TypeError, ValueError) as e:
            raise ValidationError(name, value, str(e), self.identifier) from e

    def _parse(self, enum_cls, name: str, value: str):
        try:
            return enum_cls.from_string(value)
        except ValidationError:
            raise ValidationError(name, value, f'unknown {enum_cls.__name__}',
                                  self.identifier) from None

    @property
    def months_per_period(self) -> int:
        return months_per_period(self.frequency)

    def payment_schedule(self) -> PaymentSchedule:
        """Accrual periods from issue date to maturity."""
        return PaymentSchedule(
            start=self.issue_date,
            end=self.maturity_date,
            frequency=self.frequency,
            day_count=self.day_count,
            roll_day=self.roll_day,
        )

    def remaining_tenor(self, valuation_date: DateLike) -> float:
        """Years (actual/365) from valuation date to maturity."""
        return time_in_years(valuation_date, self.maturity_date)


@dataclass(frozen=True)
class Bond(InstrumentTerms):
    """Fixed-coupon bond repaying its face value at maturity."""

    @property
    def coupon_rate(self) -> float:
        return self.rate

    @property
    def face_value(self) -> float:
        return self.notional


@dataclass(frozen=True)
class CreditDefaultSwap(InstrumentTerms):
    """
    Single-name credit default swap.

    rate is the contractual running spread as a decimal. Premiums are
    quarterly ACT/360 on the 20th by default. upfront_fee is a currency
    amount paid by the protection buyer.
    """

    frequency: int = 4
    day_count: DayCountConvention = DayCountConvention.ACT_360
    roll_day: int | None = CDS_ROLL_DAY
    recovery_rate: float = 0.4
    position: Position = Position.BUYER
    upfront_fee: float = 0.0

    def __post_init__(self):
        super().__post_init__()
        if isinstance(self.position, str):
            self._set('position', self._parse(Position, 'position', self.position))
        if not isinstance(self.position, Position):
            raise ValidationError('position', self.position, 'not a position tag',
                                  self.identifier)
        check_finite('recovery_rate', self.recovery_rate, self.identifier)
        check_finite('upfront_fee', self.upfront_fee, self.identifier)
        if not 0.0 <= self.recovery_rate < 1.0:
            raise ValidationError('recovery_rate', self.recovery_rate,
                                  'must be within [0, 1)', self.identifier)

    @property
    def spread(self) -> float:
        return self.rate

    @property
    def spread_bps(self) -> float:
        return decimal_to_bps(self.rate)

    @property
    def loss_given_default(self) -> float:
        return 1.0 - self.recovery_rate

    @classmethod
    def from_spread_bps(
        cls,
        identifier: str,
        notional: float,
        spread_bps: float,
        start_date: DateLike,
        maturity_date: DateLike,
        **kwargs,
    ) -> 'CreditDefaultSwap':
        """Build a contract quoting the running spread in basis points."""
        return cls(
            identifier=identifier,
            notional=notional,
            rate=bps_to_decimal(spread_bps),
            issue_date=start_date,
            maturity_date=maturity_date,
            **kwargs,
        )

    @classmethod
    def standard(
        cls,
        identifier: str,
        notional: float,
        spread_bps: float,
        trade_date: DateLike,
        tenor_years: int,
        **kwargs,
    ) -> 'CreditDefaultSwap':
        """
        Standard contract: accrues from the IMM date before the trade date
        and matures on the first IMM date after trade date + tenor.
        """
        td = to_date(trade_date)
        return cls.from_spread_bps(
            identifier=identifier,
            notional=notional,
            spread_bps=spread_bps,
            start_date=previous_imm_date(td),
            maturity_date=next_imm_date(add_months(td, 12 * tenor_years)),
            **kwargs,
        )
