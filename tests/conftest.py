"""
Pytest configuration for Bank Reserves tests.

Provides common fixtures and test configuration for all test modules.
"""

import pytest
import logging
import sys
from pathlib import Path

# Add src directory to Python path for imports
test_dir = Path(__file__).parent
src_dir = test_dir.parent / "src"
sys.path.insert(0, str(src_dir))

from bank_reserves.banking.fdic_models import Institution, FinancialsRecord
from bank_reserves.config.settings import clear_settings_cache


@pytest.fixture(autouse=True)
def reset_logging_state():
    """Reset logging state before each test."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.setLevel(logging.WARNING)

    yield

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep tests independent of the developer's environment and .env file."""
    for name in (
        "FDIC_API_KEY", "FDIC_API_BASE_URL", "ENVIRONMENT", "LOG_LEVEL",
        "LOG_FORMAT", "LOG_FILE_PATH", "ENABLE_CONSOLE_LOGGING",
        "ENABLE_FILE_LOGGING", "STREAMLIT_PORT", "STREAMLIT_HOST",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()

    yield

    clear_settings_cache()


@pytest.fixture
def sample_institution_rows():
    """Institution search response rows as BankFind wraps them."""
    return [
        {
            "data": {"CERT": 3511, "NAME": "Wells Fargo Bank, National Association",
                     "CITY": "Sioux Falls", "STNAME": "South Dakota", "ID": "3511"},
            "score": 12.5
        },
        {
            "data": {"CERT": 628, "NAME": "JPMorgan Chase Bank, National Association",
                     "CITY": "Columbus", "STNAME": "Ohio", "ID": "628"},
            "score": 9.1
        }
    ]


@pytest.fixture
def sample_search_payload(sample_institution_rows):
    """Full institution search response body."""
    return {
        "meta": {"total": 2, "parameters": {}},
        "data": sample_institution_rows,
        "totals": {"count": 2}
    }


@pytest.fixture
def sample_financials_payload():
    """Latest-financials response body for one institution."""
    return {
        "meta": {"total": 1},
        "data": [
            {
                "data": {
                    "ID": "3511_20230630",
                    "CERT": 3511,
                    "NAME": "Wells Fargo Bank, National Association",
                    "REPDTE": "20230630",
                    "CHBAL": 180000000,
                    "CHFRB": 120000000,
                    "LIAB": 1600000000
                }
            }
        ],
        "totals": {"count": 1}
    }


@pytest.fixture
def sample_institution():
    """A single institution model."""
    return Institution(cert=3511, name="Wells Fargo Bank, National Association",
                       city="Sioux Falls", stname="South Dakota")


@pytest.fixture
def sample_record():
    """A populated financial record."""
    return FinancialsRecord.model_validate({
        "CERT": 3511,
        "NAME": "Wells Fargo Bank, National Association",
        "REPDTE": "20230630",
        "CHBAL": 180000000,
        "CHFRB": 120000000,
        "LIAB": 1600000000,
        "ID": "3511_20230630"
    })
