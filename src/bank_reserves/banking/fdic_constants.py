"""
FDIC BankFind Suite API constants and query helpers.

Provides the API origin, endpoint names, field selections and the
search-expression builders used by the institution and financials lookups.
"""

from typing import Dict, List

# FDIC BankFind Suite API Configuration
FDIC_API_BASE_URL = "https://banks.data.fdic.gov"
FDIC_API_PATH_PREFIX = "api/"

# FDIC API Endpoints (relative to the /api/ prefix)
FDIC_INSTITUTIONS_ENDPOINT = "institutions"
FDIC_FINANCIALS_ENDPOINT = "financials"

# Query parameter carrying the optional API key
FDIC_API_KEY_PARAM = "api_key"

# Institution search (autosuggest)
INSTITUTION_SEARCH_FIELDS: List[str] = ["CERT", "NAME", "CITY", "STNAME"]
SUGGESTION_LIMIT = 8
MIN_SEARCH_LENGTH = 2

# Financial detail lookup (most recent report only)
# CHBAL: cash & balances due, CHFRB: balances at the Fed, LIAB: total liabilities
FINANCIAL_DETAIL_FIELDS: List[str] = ["NAME", "CERT", "REPDTE", "CHBAL", "CHFRB", "LIAB"]
FINANCIAL_SORT_FIELD = "REPDTE"
FINANCIAL_SORT_ORDER = "desc"
FINANCIAL_DETAIL_LIMIT = 1

# Field descriptions used for display labels
FDIC_FINANCIAL_FIELD_LABELS: Dict[str, str] = {
    "CHBAL": "Cash & balances due",
    "CHFRB": "Balances at Fed",
    "LIAB": "Total liabilities",
}

RESPONSE_FORMAT = "json"


def escape_search_term(term: str) -> str:
    """
    Escape embedded double quotes so the term can sit inside a quoted
    search expression.

    Args:
        term: Raw user-entered text

    Returns:
        Text with every ``"`` replaced by ``\\"``
    """
    return term.replace('"', '\\"')


def build_name_search(name_fragment: str) -> str:
    """
    Build the field-scoped name search expression.

    Args:
        name_fragment: Partial institution name typed by the user

    Returns:
        Search expression such as ``NAME:"First National"``
    """
    return f'NAME:"{escape_search_term(name_fragment)}"'


def build_cert_filter(cert: int) -> str:
    """
    Build the certificate-number equality filter.

    Args:
        cert: FDIC certificate number

    Returns:
        Filter expression such as ``CERT:3511``
    """
    return f"CERT:{cert}"


def build_institution_search_params(name_fragment: str) -> Dict[str, object]:
    """
    Build query parameters for the institution autosuggest request.

    Args:
        name_fragment: Partial institution name

    Returns:
        Dictionary of FDIC API query parameters
    """
    return {
        "search": build_name_search(name_fragment),
        "fields": ",".join(INSTITUTION_SEARCH_FIELDS),
        "limit": SUGGESTION_LIMIT,
        "format": RESPONSE_FORMAT,
    }


def build_financials_params(cert: int) -> Dict[str, object]:
    """
    Build query parameters for the latest-financials request.

    Args:
        cert: FDIC certificate number

    Returns:
        Dictionary of FDIC API query parameters
    """
    return {
        "filters": build_cert_filter(cert),
        "fields": ",".join(FINANCIAL_DETAIL_FIELDS),
        "sort_by": FINANCIAL_SORT_FIELD,
        "sort_order": FINANCIAL_SORT_ORDER,
        "limit": FINANCIAL_DETAIL_LIMIT,
        "format": RESPONSE_FORMAT,
    }
