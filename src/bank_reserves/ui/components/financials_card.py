"""
Financial report card for the bank reserves page.
"""

from typing import Callable

import streamlit as st

from ...banking.fdic_models import FinancialsRecord
from ...banking.formatting import build_report_rows, format_report_date
from ...banking.liquidity import LiquidityMetrics


def render_financials_card(
    record: FinancialsRecord,
    metrics: LiquidityMetrics,
    show_raw: bool,
    on_toggle_raw: Callable[[], None]
) -> None:
    """
    Render the current financial report.

    Args:
        record: Current financial report
        metrics: Ratios derived from ``record``
        show_raw: Whether the raw JSON block is expanded
        on_toggle_raw: Callback for the Show/Hide JSON button
    """
    with st.container(border=True):
        if record.is_empty:
            st.info("No financial reports found for this institution.")
            return

        title_col, toggle_col = st.columns([4, 1])
        with title_col:
            st.subheader(record.name or "")
        with toggle_col:
            st.button(
                "Hide JSON" if show_raw else "Show JSON",
                key="toggle_raw_json",
                on_click=on_toggle_raw,
                type="tertiary"
            )

        st.caption(f"As of {format_report_date(record.repdte)}")

        st.markdown(
            "\n".join(f"- **{label}:** {value}" for label, value in build_report_rows(record, metrics))
        )

        if show_raw:
            st.json(record.raw())
