"""
FDIC BankFind Suite API client.

Provides an async HTTP client for institution search and financial
report retrieval. Responses are never cached and failed requests are
never retried: every call goes to the network exactly once.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional
import aiohttp
import structlog

from .fdic_models import (
    Institution,
    FinancialsRecord,
    parse_institutions,
    parse_latest_financials
)
from .fdic_constants import (
    FDIC_API_BASE_URL,
    FDIC_API_PATH_PREFIX,
    FDIC_API_KEY_PARAM,
    FDIC_INSTITUTIONS_ENDPOINT,
    FDIC_FINANCIALS_ENDPOINT,
    build_institution_search_params,
    build_financials_params
)
from ..utils.error_handlers import RemoteRequestError

logger = structlog.get_logger(__name__, log_type="SYSTEM")


class FDICAPIClient:
    """
    Async HTTP client for the FDIC BankFind Suite API.

    The API key is optional; without one the API still answers, with
    stricter rate limits.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = FDIC_API_BASE_URL
    ):
        """
        Initialize FDIC API client.

        Args:
            api_key: FDIC API key appended to every request when set
            base_url: API origin, without the ``/api`` prefix
        """
        self.api_key = api_key or None
        self.base_url = base_url.rstrip("/")

        self.logger = logger.bind(component="fdic_api_client")

        self.logger.info(
            "FDIC API client initialized",
            has_api_key=bool(self.api_key),
            base_url=self.base_url
        )

    @classmethod
    def from_settings(cls, settings) -> "FDICAPIClient":
        """Build a client from application settings."""
        return cls(
            api_key=settings.fdic_api_key,
            base_url=settings.fdic_api_base_url
        )

    def build_url(self, path: str) -> str:
        """
        Resolve an endpoint path against the API origin.

        Absolute URLs pass through unchanged; relative paths are placed
        under ``/api/`` unless they already start with it.

        Args:
            path: Endpoint name such as ``institutions`` or a full URL

        Returns:
            Absolute request URL without query string
        """
        if path.startswith(("http://", "https://")):
            return path

        path = path.lstrip("/")
        if not path.startswith(FDIC_API_PATH_PREFIX):
            path = f"{FDIC_API_PATH_PREFIX}{path}"
        return f"{self.base_url}/{path}"

    def build_query_params(self, params: Mapping[str, Any]) -> Dict[str, str]:
        """
        Drop absent values, stringify the rest and attach the API key.

        Args:
            params: Raw query parameters; ``None`` and ``""`` are omitted

        Returns:
            Query parameters ready for the request
        """
        query_params = {
            key: str(value)
            for key, value in params.items()
            if value is not None and value != ""
        }

        if self.api_key:
            query_params[FDIC_API_KEY_PARAM] = self.api_key

        return query_params

    async def fdic_get(self, path: str, params: Mapping[str, Any]) -> Any:
        """
        Perform a GET request against the FDIC API.

        Args:
            path: Endpoint path or absolute URL
            params: Query parameters

        Returns:
            Parsed JSON response body

        Raises:
            RemoteRequestError: When the response status is not 2xx
            aiohttp.ClientError: For transport failures
            ValueError: When the body is not valid JSON
        """
        url = self.build_url(path)
        query_params = self.build_query_params(params)
        start_time = datetime.now(timezone.utc)

        self.logger.debug(
            "Executing FDIC API request",
            url=url,
            params_count=len(query_params)
        )

        async with aiohttp.ClientSession() as session:
            async with session.get(url, params=query_params) as response:
                if not 200 <= response.status < 300:
                    try:
                        body = await response.text()
                    except (aiohttp.ClientError, UnicodeDecodeError):
                        body = ""

                    self.logger.warning(
                        "FDIC API returned error status",
                        url=url,
                        status=response.status,
                        reason=response.reason
                    )
                    raise RemoteRequestError(
                        status=response.status,
                        reason=response.reason,
                        body=body,
                        url=url
                    )

                data = await response.json(content_type=None)

                execution_time = (datetime.now(timezone.utc) - start_time).total_seconds()
                self.logger.debug(
                    "FDIC API request successful",
                    status=response.status,
                    url=url,
                    execution_time=execution_time
                )

                return data

    async def search_institutions(self, name_fragment: str) -> List[Institution]:
        """
        Search institutions by partial name for autosuggest.

        Args:
            name_fragment: Text typed by the user

        Returns:
            Up to eight matching institutions; empty when the response
            has an unexpected shape
        """
        self.logger.info("Searching FDIC institutions", name=name_fragment)

        payload = await self.fdic_get(
            FDIC_INSTITUTIONS_ENDPOINT,
            build_institution_search_params(name_fragment)
        )
        institutions = parse_institutions(payload)

        self.logger.info(
            "FDIC institution search completed",
            name=name_fragment,
            results_count=len(institutions)
        )
        return institutions

    async def get_latest_financials(self, cert: int) -> FinancialsRecord:
        """
        Fetch the most recent financial report for an institution.

        Args:
            cert: FDIC certificate number

        Returns:
            The latest report, or an empty record when none exists
        """
        self.logger.info("Retrieving FDIC financial data", cert_id=cert)

        payload = await self.fdic_get(
            FDIC_FINANCIALS_ENDPOINT,
            build_financials_params(cert)
        )
        record = parse_latest_financials(payload)

        self.logger.info(
            "FDIC financial data retrieved",
            cert_id=cert,
            found=not record.is_empty,
            report_date=record.repdte
        )
        return record
