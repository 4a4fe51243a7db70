"""
Ledger File Package

Reading, indexing and rewriting plain-text ledger files.

- index: accounts, currencies and amount styles for completion
- writer: pure date-ordered insertion of a transaction into file content
- datastore: loading and atomic replacement of the file on disk
"""

from .datastore import LedgerFile
from .index import LedgerIndex, ParseWarning
from .writer import Insertion, insert_transaction, plan_insertion, serialize_transaction

__all__ = [
    "Insertion",
    "LedgerFile",
    "LedgerIndex",
    "ParseWarning",
    "insert_transaction",
    "plan_insertion",
    "serialize_transaction",
]
