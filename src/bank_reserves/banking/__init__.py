"""
Banking data components.

API client, models and derived metrics for FDIC BankFind data.
"""

# This module provides:
# - fdic_api_client.py: FDIC BankFind Suite API client
# - fdic_models.py: Institution and financial report models
# - fdic_constants.py: Endpoints, field selections and query builders
# - liquidity.py: Cash and Fed-balance ratios to total liabilities
# - formatting.py: Money, ratio and report-date display helpers

__all__ = []
