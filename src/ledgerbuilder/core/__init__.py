"""
Core Utilities Package

Primitives shared by every other package.

This package provides:
- Money with exact Decimal arithmetic and currency safety
- Amount token parsing and formatting in the ledger file's own style
- LedgerDate for transaction headers
- The error hierarchy
- Configuration management and logging setup
"""

from .config import Config, Environment, get_config, reload_config
from .currency import AmountStyle, format_amount, split_amount_token
from .dates import LedgerDate
from .money import Money

__all__ = [
    "AmountStyle",
    # Configuration
    "Config",
    "Environment",
    "LedgerDate",
    "Money",
    "format_amount",
    "get_config",
    "reload_config",
    "split_amount_token",
]
