"""
Streamlit page for looking up FDIC institution reserves.

Type at least two characters of a bank name to get suggestions, pick one
to load its latest reported cash, Fed balances and total liabilities
together with the derived liquidity ratios.

Run with ``bank-reserves`` or ``streamlit run`` on this file.
"""

import asyncio
from typing import Optional

import streamlit as st
import structlog

from bank_reserves.banking.fdic_api_client import FDICAPIClient
from bank_reserves.banking.fdic_models import Institution
from bank_reserves.config.settings import Settings, get_settings
from bank_reserves.services.logging_service import setup_logging
from bank_reserves.ui.components import render_financials_card
from bank_reserves.ui.reserves_controller import ReservesController

logger = structlog.get_logger(__name__)

QUERY_KEY = "query_input"
CONTROLLER_KEY = "reserves_controller"
LOGGING_KEY = "logging_configured"


class BankReservesApp:
    """Single-page Streamlit app wrapping a ReservesController."""

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize the page and per-session state."""
        st.set_page_config(
            page_title="Bank Reserves",
            page_icon="🏦",
            layout="centered"
        )

        self.settings = settings or get_settings()

        # structlog must be configured before the loggers below are bound
        if LOGGING_KEY not in st.session_state:
            setup_logging(self.settings)
            st.session_state[LOGGING_KEY] = True

        self.logger = logger.bind(
            log_type="SYSTEM",
            component="bank_reserves_app"
        )

        self._initialize_session_state()

    def _initialize_session_state(self):
        """Initialize Streamlit session state variables."""
        if CONTROLLER_KEY not in st.session_state:
            client = FDICAPIClient.from_settings(self.settings)
            st.session_state[CONTROLLER_KEY] = ReservesController(client)
            self.logger.info("Session started", fdic_api_key_configured=self.settings.has_fdic_api_key())

        if QUERY_KEY not in st.session_state:
            st.session_state[QUERY_KEY] = ""

    @property
    def controller(self) -> ReservesController:
        return st.session_state[CONTROLLER_KEY]

    def _on_query_change(self):
        """Search box edited: re-enable autosuggest and refresh suggestions."""
        self.controller.edit_query(st.session_state[QUERY_KEY])
        asyncio.run(self.controller.refresh_suggestions())

    def _on_select(self, institution: Institution):
        """Suggestion clicked: fill the search box and load financials."""
        st.session_state[QUERY_KEY] = institution.label
        with st.spinner("Loading…"):
            asyncio.run(self.controller.select_institution(institution))

    def _render_suggestions(self):
        suggestions = self.controller.state.suggestions
        if not suggestions:
            return

        with st.container(border=True):
            for institution in suggestions:
                st.button(
                    institution.label,
                    key=f"suggestion_{institution.cert}",
                    on_click=self._on_select,
                    args=(institution,),
                    width="stretch"
                )

    def run(self):
        """Render the page."""
        st.title("Bank Reserves")

        st.text_input(
            "Bank name",
            key=QUERY_KEY,
            placeholder="Type a bank name…",
            on_change=self._on_query_change,
            label_visibility="collapsed"
        )

        self._render_suggestions()

        # Lookups finish inside their callbacks; st.spinner in _on_select shows loading
        state = self.controller.state
        if state.error:
            st.error(state.error)

        if state.record is not None:
            render_financials_card(
                record=state.record,
                metrics=self.controller.metrics,
                show_raw=state.show_raw,
                on_toggle_raw=self.controller.toggle_raw_view
            )


def main():
    """Main function to run the Streamlit page."""
    app = BankReservesApp()
    app.run()


if __name__ == "__main__":
    main()
