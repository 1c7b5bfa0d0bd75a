"""
IMM (International Monetary Market) dates.

Standard CDS contracts start and mature on the 20th of March, June,
September or December.
"""

from opendate import Date

from .config import CDS_ROLL_DAY
from .dates import DateLike, to_date

IMM_MONTHS = (3, 6, 9, 12)

IMM_DAY = CDS_ROLL_DAY


def is_imm_date(d: DateLike) -> bool:
    """True if the date is the 20th of an IMM month."""
    od = to_date(d)
    return od.day == IMM_DAY and od.month in IMM_MONTHS


def _imm_candidates(year: int, month: int, step: int):
    """IMM dates walking from (year, month) one month at a time."""
    for i in range(13):
        m = month - 1 + step * i
        y, m = year + m // 12, m % 12 + 1
        if m in IMM_MONTHS:
            yield Date(y, m, IMM_DAY)


def next_imm_date(d: DateLike, include_current: bool = False) -> Date:
    """
    First IMM date after d.

    Args:
        d: Reference date
        include_current: If True and d is an IMM date, return d
    """
    od = to_date(d)
    if include_current and is_imm_date(od):
        return od
    for candidate in _imm_candidates(od.year, od.month, 1):
        if candidate > od:
            return candidate
    raise RuntimeError(f'No IMM date found after {od}')


def previous_imm_date(d: DateLike) -> Date:
    """Last IMM date strictly before d."""
    od = to_date(d)
    for candidate in _imm_candidates(od.year, od.month, -1):
        if candidate < od:
            return candidate
    raise RuntimeError(f'No IMM date found before {od}')
