"""
Valuation and risk result containers.
"""

from dataclasses import dataclass

from .cashflows import CashFlow
from .instruments import decimal_to_bps


@dataclass(frozen=True)
class RiskMetrics:
    """
    Sensitivities of a single instrument.

    Bonds fill the duration/convexity fields and dv01; CDS fill cs01,
    dv01 and risky_duration. DV01/CS01 are value changes per basis point.
    """

    macaulay_duration: float | None = None
    modified_duration: float | None = None
    dollar_duration: float | None = None
    convexity: float | None = None
    dv01: float | None = None
    cs01: float | None = None
    risky_duration: float | None = None


@dataclass(frozen=True)
class ValuationResult:
    """
    Results from pricing one instrument.

    npv is the bond's full (dirty) price, or the CDS value signed by
    position: protection buyer = protection - premium - upfront fee.
    """

    identifier: str
    npv: float
    cashflows: tuple[CashFlow, ...] = ()

    # Bonds
    accrued_interest: float | None = None
    clean_price: float | None = None

    # CDS legs
    premium_leg_pv: float | None = None
    protection_leg_pv: float | None = None
    upfront_fee: float | None = None
    risky_annuity: float | None = None
    fair_spread: float | None = None

    risk: RiskMetrics | None = None

    @property
    def price(self) -> float:
        return self.npv

    @property
    def fair_spread_bps(self) -> float | None:
        return None if self.fair_spread is None else decimal_to_bps(self.fair_spread)

    def __repr__(self) -> str:
        lines = [f'ValuationResult({self.identifier},', f'  npv={self.npv:.6f},']
        if self.clean_price is not None:
            lines.append(f'  clean_price={self.clean_price:.6f},')
        if self.premium_leg_pv is not None:
            lines.append(f'  premium_leg_pv={self.premium_leg_pv:.6f},')
            lines.append(f'  protection_leg_pv={self.protection_leg_pv:.6f},')
        if self.fair_spread is not None:
            lines.append(f'  fair_spread={self.fair_spread_bps:.4f}bps,')
        lines.append(')')
        return '\n'.join(lines)
