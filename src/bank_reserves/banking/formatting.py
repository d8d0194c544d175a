"""
Display formatting for financial values, ratios and report dates.
"""

import math
import re
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, List, Optional, Tuple

from .fdic_constants import FDIC_FINANCIAL_FIELD_LABELS
from .fdic_models import FinancialsRecord
from .liquidity import LiquidityMetrics

UNAVAILABLE = "—"

_COMPACT_DATE = re.compile(r"^\d{8}$")


def _render_date(value: datetime) -> str:
    return f"{value.month}/{value.day}/{value.year}"


def format_money(value: Any) -> str:
    """
    Format a dollar amount as a thousands-separated whole number.

    Args:
        value: Amount as int, float or numeric string

    Returns:
        e.g. ``1,234,567``; the unavailable placeholder for missing,
        non-numeric or non-finite values
    """
    if value is None or isinstance(value, bool):
        return UNAVAILABLE
    try:
        number = float(value)
    except (TypeError, ValueError):
        return UNAVAILABLE
    if not math.isfinite(number):
        return UNAVAILABLE
    # Halves round away from zero
    whole = Decimal(str(number)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{whole:,}"


def format_ratio(ratio: Optional[float]) -> str:
    """Format a ratio as a percentage with two decimals, e.g. ``12.35%``."""
    if ratio is None or not math.isfinite(ratio):
        return UNAVAILABLE
    return f"{ratio * 100:.2f}%"


def format_report_date(value: Any) -> str:
    """
    Format an FDIC report date for display.

    ``YYYYMMDD`` strings are read as UTC calendar dates. Other strings
    are tried as ISO-8601 and returned unchanged when that fails.

    Args:
        value: Report date as string or integer, or None

    Returns:
        e.g. ``6/30/2023``; the input itself when it cannot be parsed;
        the unavailable placeholder when absent
    """
    if value is None or value == "":
        return UNAVAILABLE

    text = str(value)
    if _COMPACT_DATE.match(text):
        try:
            parsed = datetime(int(text[:4]), int(text[4:6]), int(text[6:]), tzinfo=timezone.utc)
        except ValueError:
            return text
        return _render_date(parsed)

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return text
    return _render_date(parsed)


def build_report_rows(record: FinancialsRecord, metrics: LiquidityMetrics) -> List[Tuple[str, str]]:
    """Label/value pairs describing a report, in display order."""
    rows = [
        (f"{field} ({FDIC_FINANCIAL_FIELD_LABELS[field]})", format_money(getattr(record, field.lower())))
        for field in ("CHBAL", "CHFRB", "LIAB")
    ]
    rows.append(("Liquidity ratio (CHBAL ÷ LIAB)", format_ratio(metrics.liquidity_ratio)))
    rows.append(("Fed balances ÷ liabilities (CHFRB ÷ LIAB)", format_ratio(metrics.fed_reserves_ratio)))
    return rows
