"""
View state and orchestration for the bank reserves lookup page.

The controller owns a single ReservesViewState and is the only thing
that mutates it. Lookups are coroutines so the page can run them on an
event loop without blocking; each flow tags its requests with a
generation number and drops any result that is no longer current.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
import structlog

from ..banking.fdic_api_client import FDICAPIClient
from ..banking.fdic_constants import MIN_SEARCH_LENGTH
from ..banking.fdic_models import Institution, FinancialsRecord
from ..banking.liquidity import LiquidityMetrics, compute_liquidity_metrics
from ..utils.error_handlers import format_error_for_user, log_handled_error

logger = structlog.get_logger(__name__, log_type="SYSTEM")


class ReservesViewState(BaseModel):
    """Everything the page renders. Lives for one browser session."""

    query: str = Field("", description="Search box text")
    suggestions: List[Institution] = Field(default_factory=list)
    show_suggestions: bool = Field(
        True,
        description="Autosuggest is paused after a selection until the text is edited"
    )
    record: Optional[FinancialsRecord] = Field(None, description="Current financial report")
    error: Optional[str] = Field(None, description="Shared error slot for both lookups")
    loading: bool = False
    show_raw: bool = False

    model_config = ConfigDict(validate_assignment=True)


class ReservesController:
    """
    Drives suggestion and detail lookups against the FDIC client.

    Changing the query text or the autosuggest flag invalidates any
    suggestion lookup still in flight; starting a detail lookup
    invalidates the previous one. Invalidated requests are not aborted,
    their results are simply ignored.
    """

    def __init__(self, client: FDICAPIClient, state: Optional[ReservesViewState] = None):
        self.client = client
        self.state = state or ReservesViewState()
        self._suggestion_generation = 0
        self._detail_generation = 0
        self.logger = logger.bind(component="reserves_controller")

    # State transitions

    def set_query(self, text: str) -> None:
        if text != self.state.query:
            self._suggestion_generation += 1
        self.state.query = text

    def set_show_suggestions(self, enabled: bool) -> None:
        if enabled != self.state.show_suggestions:
            self._suggestion_generation += 1
        self.state.show_suggestions = enabled

    def set_suggestions(self, suggestions: List[Institution]) -> None:
        self.state.suggestions = list(suggestions)

    def set_record(self, record: Optional[FinancialsRecord]) -> None:
        self.state.record = record

    def set_error(self, message: Optional[str]) -> None:
        self.state.error = message

    def set_loading(self, loading: bool) -> None:
        self.state.loading = loading

    def toggle_raw_view(self) -> bool:
        self.state.show_raw = not self.state.show_raw
        return self.state.show_raw

    # User actions

    def edit_query(self, text: str) -> None:
        """Typing in the search box re-enables autosuggest."""
        self.set_show_suggestions(True)
        self.set_query(text)

    async def refresh_suggestions(self) -> None:
        """
        Look up institutions matching the current query.

        Short queries, and queries typed while autosuggest is paused,
        clear the list without touching the network.
        """
        self._suggestion_generation += 1
        generation = self._suggestion_generation
        query = self.state.query

        if not self.state.show_suggestions or len(query.strip()) < MIN_SEARCH_LENGTH:
            self.set_suggestions([])
            return

        self.set_error(None)
        try:
            suggestions = await self.client.search_institutions(query)
        except Exception as e:
            if generation == self._suggestion_generation:
                log_handled_error(e, "search_institutions", query=query)
                self.set_error(format_error_for_user(e))
            return

        if generation != self._suggestion_generation:
            self.logger.debug(
                "Discarding stale suggestions",
                query=query,
                generation=generation,
                current_generation=self._suggestion_generation
            )
            return

        self.set_suggestions(suggestions)

    async def select_institution(self, institution: Institution) -> None:
        """Fill the search box with the selection and load its financials."""
        self.set_query(institution.label)
        self.set_show_suggestions(False)
        self.set_suggestions([])
        self.state.show_raw = False

        self.logger.info(
            "Institution selected",
            cert_id=institution.cert,
            name=institution.name
        )
        await self.load_financials(institution.cert)

    async def load_financials(self, cert: int) -> None:
        """Replace the current record with the latest report for ``cert``."""
        self._detail_generation += 1
        generation = self._detail_generation

        self.set_loading(True)
        self.set_error(None)
        self.set_record(None)

        try:
            record = await self.client.get_latest_financials(cert)
            if generation == self._detail_generation:
                self.set_record(record)
            else:
                self.logger.debug("Discarding stale financials", cert_id=cert)
        except Exception as e:
            if generation == self._detail_generation:
                log_handled_error(e, "get_latest_financials", cert_id=cert)
                self.set_error(format_error_for_user(e))
        finally:
            if generation == self._detail_generation:
                self.set_loading(False)

    # Derived values

    @property
    def metrics(self) -> LiquidityMetrics:
        return compute_liquidity_metrics(self.state.record)
