"""
Transaction Package

Command parsing, immutable postings/transactions and the builder state
machine that turns commands into balanced transactions.
"""

from .builder import BuilderState, TransactionBuilder
from .commands import TokenType, expected_token, parse_command, parse_header
from .models import Posting, Transaction, TransactionHeader

__all__ = [
    "BuilderState",
    "Posting",
    "TokenType",
    "Transaction",
    "TransactionBuilder",
    "TransactionHeader",
    "expected_token",
    "parse_command",
    "parse_header",
]
