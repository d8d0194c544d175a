"""
Derived liquidity metrics for a financial report.

Both ratios divide a cash figure by total liabilities and are only
defined when numerator and denominator are finite and strictly positive.
"""

import math
from typing import Any, NamedTuple, Optional

from .fdic_models import FinancialsRecord


class LiquidityMetrics(NamedTuple):
    """Ratios derived from one FinancialsRecord; ``None`` means unavailable."""

    liquidity_ratio: Optional[float]
    fed_reserves_ratio: Optional[float]


def _positive_number(value: Any) -> Optional[float]:
    """Return ``value`` as a float if it is a finite number above zero."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def _safe_ratio(numerator: Any, denominator: Any) -> Optional[float]:
    top = _positive_number(numerator)
    bottom = _positive_number(denominator)
    if top is None or bottom is None:
        return None
    return top / bottom


def liquidity_ratio(record: Optional[FinancialsRecord]) -> Optional[float]:
    """Cash and balances due (CHBAL) divided by total liabilities (LIAB)."""
    if record is None:
        return None
    return _safe_ratio(record.chbal, record.liab)


def fed_reserves_ratio(record: Optional[FinancialsRecord]) -> Optional[float]:
    """Balances at the Federal Reserve (CHFRB) divided by total liabilities (LIAB)."""
    if record is None:
        return None
    return _safe_ratio(record.chfrb, record.liab)


def compute_liquidity_metrics(record: Optional[FinancialsRecord]) -> LiquidityMetrics:
    """Compute both ratios for the current record."""
    return LiquidityMetrics(
        liquidity_ratio=liquidity_ratio(record),
        fed_reserves_ratio=fed_reserves_ratio(record),
    )
