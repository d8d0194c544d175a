"""
Pydantic data models for FDIC BankFind Suite API data structures.

The API returns upper-case field names; models accept those through
aliases and expose lower-case attributes.
"""

from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field, PrivateAttr, field_validator, model_validator, ConfigDict
import structlog

logger = structlog.get_logger(__name__, log_type="SYSTEM")

Number = Union[int, float]


class Institution(BaseModel):
    """
    A banking institution row from the institution search endpoint.

    Only the autosuggest fields are modelled; anything else the API
    sends is ignored.
    """

    cert: int = Field(
        ...,
        alias="CERT",
        description="FDIC Certificate number - unique identifier"
    )
    name: str = Field(
        ...,
        alias="NAME",
        description="Institution name as reported to FDIC",
        min_length=1
    )
    city: Optional[str] = Field(
        None,
        alias="CITY",
        description="City where institution is located"
    )
    stname: Optional[str] = Field(
        None,
        alias="STNAME",
        description="Full state name (e.g., 'California')"
    )

    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
        frozen=True,
        extra="ignore"
    )

    @property
    def label(self) -> str:
        """Display label, e.g. ``First Bank (Springfield, Illinois)``."""
        return f"{self.name} ({self.city or ''}, {self.stname or ''})"


class FinancialsRecord(BaseModel):
    """
    Most recent financial report for one institution.

    Dollar amounts are in thousands, as reported by FDIC. Fields beyond
    the modelled ones are kept verbatim for the raw JSON view.
    """

    cert: Optional[int] = Field(
        None,
        alias="CERT",
        description="FDIC Certificate number"
    )
    name: Optional[str] = Field(
        None,
        alias="NAME",
        description="Institution name"
    )
    repdte: Optional[str] = Field(
        None,
        alias="REPDTE",
        description="Report date, normally YYYYMMDD"
    )
    chbal: Optional[Number] = Field(
        None,
        alias="CHBAL",
        description="Cash and balances due from depository institutions"
    )
    chfrb: Optional[Number] = Field(
        None,
        alias="CHFRB",
        description="Balances due from Federal Reserve Banks"
    )
    liab: Optional[Number] = Field(
        None,
        alias="LIAB",
        description="Total liabilities"
    )

    _raw: Dict[str, Any] = PrivateAttr(default_factory=dict)

    model_config = ConfigDict(
        populate_by_name=True,
        extra="allow"
    )

    @model_validator(mode='wrap')
    @classmethod
    def keep_raw_row(cls, data: Any, handler) -> "FinancialsRecord":
        """Remember the row exactly as received for the raw JSON view."""
        record = handler(data)
        if isinstance(data, dict):
            record._raw = dict(data)
        return record

    @field_validator('repdte', mode='before')
    @classmethod
    def validate_report_date(cls, v: Any) -> Optional[str]:
        """Report dates sometimes arrive as integers."""
        if v is None:
            return None
        return str(v)

    @field_validator('chbal', 'chfrb', 'liab', mode='before')
    @classmethod
    def validate_financial_amount(cls, v: Any) -> Any:
        """Amounts that are not numbers are treated as not reported."""
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, (int, float)):
            return v
        try:
            float(v)
        except (TypeError, ValueError):
            logger.debug("Ignoring non-numeric financial amount", value=repr(v))
            return None
        return v

    @property
    def is_empty(self) -> bool:
        """True when the API returned no report for the institution."""
        return not self.model_fields_set and not self.model_extra

    def raw(self) -> Dict[str, Any]:
        """Return a copy of the row exactly as the API sent it."""
        return dict(self._raw)


def extract_records(payload: Any) -> List[Dict[str, Any]]:
    """
    Unwrap records from a BankFind response body.

    BankFind wraps every row as ``{"data": {...}, "score": ...}`` inside a
    top-level ``data`` list. Anything not shaped like that yields no rows.

    Args:
        payload: Parsed JSON response body

    Returns:
        List of record dictionaries
    """
    if not isinstance(payload, dict):
        return []

    rows = payload.get("data")
    if not isinstance(rows, list):
        return []

    records = []
    for row in rows:
        if isinstance(row, dict) and isinstance(row.get("data"), dict):
            records.append(row["data"])
        else:
            logger.debug("Skipping malformed response row", row_type=type(row).__name__)
    return records


def parse_institutions(payload: Any) -> List[Institution]:
    """
    Convert a search response into Institution models.

    Rows that fail validation are skipped.

    Args:
        payload: Parsed JSON response body

    Returns:
        List of institutions in response order
    """
    institutions = []
    for record in extract_records(payload):
        try:
            institutions.append(Institution.model_validate(record))
        except ValueError as e:
            logger.warning(
                "Failed to process institution data",
                institution_data=record,
                error=str(e)
            )
            continue
    return institutions


def parse_latest_financials(payload: Any) -> FinancialsRecord:
    """
    Convert a financials response into its first record.

    Args:
        payload: Parsed JSON response body

    Returns:
        The first record, or an empty record when the response has none
    """
    records = extract_records(payload)
    if not records:
        return FinancialsRecord()
    return FinancialsRecord.model_validate(records[0])
