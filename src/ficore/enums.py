"""
Enumeration types for the pricing core.

Conventions are closed sets: unknown text is rejected when parsed rather
than falling through to a default.
"""

from enum import Enum

from .config import DAYS_PER_YEAR, DAYS_PER_YEAR_360
from .exceptions import ValidationError


def _normalize(s: str) -> str:
    return s.upper().replace(' ', '').replace('_', '').replace('-', '')


class DayCountConvention(Enum):
    """Day count conventions for sizing coupon and premium accruals.

    All conventions count actual calendar days. 30/360 is the simplified
    actual/360 rule, not the ISDA date-component method.
    """

    ACT_ACT = 'ACT/ACT'
    ACT_365 = 'ACT/365'
    ACT_360 = 'ACT/360'
    THIRTY_360 = '30/360'

    @property
    def denominator(self) -> float:
        """Days per year used to turn a day count into a year fraction."""
        if self in {DayCountConvention.ACT_ACT, DayCountConvention.ACT_365}:
            return DAYS_PER_YEAR
        return DAYS_PER_YEAR_360

    @classmethod
    def from_string(cls, s: str) -> 'DayCountConvention':
        """Parse a day count convention from string."""
        mapping = {
            'ACT/ACT': cls.ACT_ACT,
            'ACTACT': cls.ACT_ACT,
            'ACT/ACTISDA': cls.ACT_ACT,
            'ACT/365': cls.ACT_365,
            'ACT365': cls.ACT_365,
            'ACT/365F': cls.ACT_365,
            'A365': cls.ACT_365,
            'ACT/360': cls.ACT_360,
            'ACT360': cls.ACT_360,
            'A360': cls.ACT_360,
            '30/360': cls.THIRTY_360,
            '30360': cls.THIRTY_360,
        }
        key = _normalize(s)
        if key not in mapping:
            raise ValidationError('day_count', s, 'unknown day count convention')
        return mapping[key]


class Compounding(Enum):
    """How a flat rate is turned into discount factors."""

    CONTINUOUS = 'continuous'   # exp(-r * t)
    PERIODIC = 'periodic'       # (1 + r/m) ** (-t * m)

    @classmethod
    def from_string(cls, s: str) -> 'Compounding':
        """Parse a compounding convention from string."""
        mapping = {
            'CONTINUOUS': cls.CONTINUOUS,
            'C': cls.CONTINUOUS,
            'PERIODIC': cls.PERIODIC,
            'DISCRETE': cls.PERIODIC,
            'P': cls.PERIODIC,
        }
        key = _normalize(s)
        if key not in mapping:
            raise ValidationError('compounding', s, 'unknown compounding convention')
        return mapping[key]


class PaymentFrequency(Enum):
    """Payment frequency, valued in periods per year."""

    ANNUAL = 1
    SEMI_ANNUAL = 2
    QUARTERLY = 4
    MONTHLY = 12

    @property
    def months(self) -> int:
        """Return the number of months between payments."""
        return 12 // self.value

    @classmethod
    def from_string(cls, s: str) -> 'PaymentFrequency':
        """Parse payment frequency from string."""
        mapping = {
            'A': cls.ANNUAL,
            'ANNUAL': cls.ANNUAL,
            '1Y': cls.ANNUAL,
            '12M': cls.ANNUAL,
            'S': cls.SEMI_ANNUAL,
            'SEMIANNUAL': cls.SEMI_ANNUAL,
            '6M': cls.SEMI_ANNUAL,
            'Q': cls.QUARTERLY,
            'QUARTERLY': cls.QUARTERLY,
            '3M': cls.QUARTERLY,
            'M': cls.MONTHLY,
            'MONTHLY': cls.MONTHLY,
            '1M': cls.MONTHLY,
        }
        key = _normalize(s)
        if key not in mapping:
            raise ValidationError('frequency', s, 'unknown payment frequency')
        return mapping[key]


class Position(Enum):
    """Side of a credit default swap."""

    BUYER = 'buyer'     # buys protection, pays premium
    SELLER = 'seller'   # sells protection, receives premium

    @property
    def sign(self) -> int:
        """+1 for the protection buyer, -1 for the seller."""
        return 1 if self is Position.BUYER else -1

    @classmethod
    def from_string(cls, s: str) -> 'Position':
        """Parse a position tag from string."""
        mapping = {
            'BUYER': cls.BUYER,
            'BUY': cls.BUYER,
            'PAYER': cls.BUYER,
            'LONG': cls.BUYER,
            'PROTECTIONBUYER': cls.BUYER,
            'SELLER': cls.SELLER,
            'SELL': cls.SELLER,
            'RECEIVER': cls.SELLER,
            'SHORT': cls.SELLER,
            'PROTECTIONSELLER': cls.SELLER,
        }
        key = _normalize(s)
        if key not in mapping:
            raise ValidationError('position', s, 'unknown position tag')
        return mapping[key]
