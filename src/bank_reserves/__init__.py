"""
Bank Reserves: FDIC institution lookup with cash and Fed-balance liquidity ratios.
"""

__version__ = "1.0.0"
