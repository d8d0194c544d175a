"""
Unit tests for the Streamlit page and its components.

Streamlit itself is replaced with a MagicMock and session state with a
plain dict, so the page logic can run outside a Streamlit server.
"""

from unittest.mock import AsyncMock, MagicMock, Mock, patch

import pytest

from bank_reserves.banking.fdic_models import FinancialsRecord
from bank_reserves.banking.liquidity import compute_liquidity_metrics
from bank_reserves.config.settings import Settings
from bank_reserves.ui.reserves_controller import ReservesController, ReservesViewState


@pytest.fixture
def mock_settings():
    """Settings for testing."""
    return Settings(fdic_api_key="test_key", enable_console_logging=False)


@pytest.fixture
def mock_st():
    """Mock Streamlit module."""
    st = MagicMock()
    st.session_state = {}
    st.columns.return_value = [MagicMock(), MagicMock()]
    return st


@pytest.fixture
def app(mock_settings, mock_st):
    """Create BankReservesApp instance for testing."""
    with patch('bank_reserves.ui.streamlit_app.st', mock_st), \
         patch('bank_reserves.ui.streamlit_app.setup_logging'):
        from bank_reserves.ui.streamlit_app import BankReservesApp
        yield BankReservesApp(settings=mock_settings)


@pytest.fixture
def mock_controller(mock_st):
    """Replace the session's controller with a mock."""
    controller = Mock(spec=ReservesController)
    controller.state = ReservesViewState()
    controller.refresh_suggestions = AsyncMock()
    controller.select_institution = AsyncMock()
    mock_st.session_state["reserves_controller"] = controller
    return controller


class TestBankReservesApp:
    """Test cases for BankReservesApp."""

    def test_initialization(self, mock_settings, mock_st):
        with patch('bank_reserves.ui.streamlit_app.st', mock_st), \
             patch('bank_reserves.ui.streamlit_app.setup_logging') as mock_setup_logging:
            from bank_reserves.ui.streamlit_app import BankReservesApp
            app = BankReservesApp(settings=mock_settings)

        assert app.settings is mock_settings
        mock_st.set_page_config.assert_called_once()
        mock_setup_logging.assert_called_once_with(mock_settings)

    def test_session_state_initialized(self, app, mock_st):
        assert isinstance(mock_st.session_state["reserves_controller"], ReservesController)
        assert mock_st.session_state["query_input"] == ""
        assert mock_st.session_state["logging_configured"] is True
        assert app.controller.client.api_key == "test_key"

    def test_session_state_survives_rerun(self, app, mock_st):
        controller = app.controller

        app._initialize_session_state()

        assert mock_st.session_state["reserves_controller"] is controller

    def test_query_change_refreshes_suggestions(self, app, mock_st, mock_controller):
        mock_st.session_state["query_input"] = "Wells"

        app._on_query_change()

        mock_controller.edit_query.assert_called_once_with("Wells")
        mock_controller.refresh_suggestions.assert_awaited_once()

    def test_select_fills_search_box(self, app, mock_st, mock_controller, sample_institution):
        app._on_select(sample_institution)

        assert mock_st.session_state["query_input"] == sample_institution.label
        mock_controller.select_institution.assert_awaited_once_with(sample_institution)
        mock_st.spinner.assert_called_once_with("Loading…")

    def test_render_suggestions(self, app, mock_st, mock_controller, sample_institution):
        mock_controller.state.suggestions = [sample_institution]

        app._render_suggestions()

        mock_st.button.assert_called_once()
        args, kwargs = mock_st.button.call_args
        assert args[0] == sample_institution.label
        assert kwargs["key"] == "suggestion_3511"
        assert kwargs["args"] == (sample_institution,)
        assert kwargs["width"] == "stretch"

    def test_render_no_suggestions(self, app, mock_st, mock_controller):
        app._render_suggestions()

        mock_st.button.assert_not_called()

    def test_run_shows_error(self, app, mock_st, mock_controller):
        mock_controller.state.error = "FDIC request failed: 500"
        mock_controller.state.loading = True

        with patch('bank_reserves.ui.streamlit_app.render_financials_card') as mock_card:
            app.run()

        mock_st.text_input.assert_called_once()
        mock_st.error.assert_called_once_with("FDIC request failed: 500")
        mock_st.info.assert_not_called()
        mock_card.assert_not_called()

    def test_run_renders_card(self, app, mock_st, mock_controller, sample_record):
        mock_controller.state.record = sample_record
        mock_controller.metrics = compute_liquidity_metrics(sample_record)

        with patch('bank_reserves.ui.streamlit_app.render_financials_card') as mock_card:
            app.run()

        mock_st.error.assert_not_called()
        mock_card.assert_called_once()
        assert mock_card.call_args.kwargs["record"] is sample_record


class TestFinancialsCard:
    """Test cases for the financial report card."""

    def test_empty_record(self, mock_st):
        from bank_reserves.ui.components.financials_card import render_financials_card

        with patch('bank_reserves.ui.components.financials_card.st', mock_st):
            render_financials_card(FinancialsRecord(), compute_liquidity_metrics(None), False, Mock())

        mock_st.info.assert_called_once_with("No financial reports found for this institution.")
        mock_st.markdown.assert_not_called()

    def test_populated_record(self, mock_st, sample_record):
        from bank_reserves.ui.components.financials_card import render_financials_card

        with patch('bank_reserves.ui.components.financials_card.st', mock_st):
            render_financials_card(sample_record, compute_liquidity_metrics(sample_record), False, Mock())

        mock_st.caption.assert_called_once_with("As of 6/30/2023")
        markdown = mock_st.markdown.call_args.args[0]
        assert "**CHBAL (Cash & balances due):** 180,000,000" in markdown
        assert "**Liquidity ratio (CHBAL ÷ LIAB):** 11.25%" in markdown
        assert mock_st.button.call_args.args[0] == "Show JSON"
        mock_st.json.assert_not_called()

    def test_raw_view(self, mock_st, sample_record):
        from bank_reserves.ui.components.financials_card import render_financials_card

        with patch('bank_reserves.ui.components.financials_card.st', mock_st):
            render_financials_card(sample_record, compute_liquidity_metrics(sample_record), True, Mock())

        assert mock_st.button.call_args.args[0] == "Hide JSON"
        mock_st.json.assert_called_once_with(sample_record.raw())
