"""
Ledger Builder - Interactive Double-Entry Transaction Entry

Builds balanced transactions one posting at a time and inserts them into a
plain-text ledger file in date order.

Key Features:
- Per-currency running totals with exact Decimal arithmetic
- Split shorthand for shared expenses (floor half to the first account)
- Automatic balancing posting on finalize
- Date-ordered insertion that leaves the rest of the file untouched
- Account and currency completion learned from the existing file

Domain Packages:
- core: Money, currency tokens, dates, errors, configuration
- transaction: Command parsing, postings and the TransactionBuilder
- ledger: File index, insertion logic and atomic file replacement
- cli: Interactive session and command-line entry point

Example Usage:
    from ledgerbuilder import TransactionBuilder, insert_transaction

    builder = TransactionBuilder()
    builder.start_header("2020-01-10", "Groceries")
    builder.apply_add("Expenses:Food", "€", "5.00")
    transaction = builder.apply_finalize("Assets:Checking")
    new_content = insert_transaction(old_content, transaction)
"""

__version__ = "0.1.0"

from .core.errors import (
    CurrencyMismatch,
    EmptyTransaction,
    InvalidDate,
    InvalidState,
    IOFailure,
    LedgerBuilderError,
    MalformedCommand,
    UnbalancedTransaction,
)
from .core.money import Money
from .ledger.index import LedgerIndex
from .ledger.writer import insert_transaction, plan_insertion
from .transaction.builder import TransactionBuilder
from .transaction.models import Posting, Transaction, TransactionHeader

__all__ = [
    # Errors
    "CurrencyMismatch",
    "EmptyTransaction",
    "IOFailure",
    "InvalidDate",
    "InvalidState",
    "LedgerBuilderError",
    "MalformedCommand",
    "UnbalancedTransaction",
    # Core types
    "Money",
    "Posting",
    "Transaction",
    "TransactionHeader",
    "TransactionBuilder",
    # Ledger file handling
    "LedgerIndex",
    "insert_transaction",
    "plan_insertion",
]
