"""
UI Components for the bank reserves page.
"""

from .financials_card import render_financials_card

__all__ = ["render_financials_card"]
