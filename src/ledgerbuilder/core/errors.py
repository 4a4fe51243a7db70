#!/usr/bin/env python3
"""
Error Kinds

Every failure the builder, parser, writer or file layer reports derives from
LedgerBuilderError so the session loop can report it uniformly.

Recovery rules:
- InvalidDate, CurrencyMismatch, InvalidState, MalformedCommand: reported,
  in-progress state unchanged, session continues.
- EmptyTransaction: aborts only the current transaction.
- IOFailure: retryable during save, fatal at startup.
"""


class LedgerBuilderError(Exception):
    """Base class for all ledger builder errors."""

    pass


class InvalidDate(LedgerBuilderError):
    """Raised when a header date cannot be parsed."""

    pass


class CurrencyMismatch(LedgerBuilderError):
    """Raised when two Money values of different currencies are combined."""

    def __init__(self, left: str, right: str) -> None:
        super().__init__(f"Cannot combine amounts in {left!r} and {right!r}")
        self.left = left
        self.right = right


class InvalidState(LedgerBuilderError):
    """Raised when a command is issued out of sequence."""

    pass


class UnbalancedTransaction(InvalidState):
    """Raised when a transaction without an open slot does not sum to zero."""

    pass


class EmptyTransaction(LedgerBuilderError):
    """Raised when finalizing a transaction that has no concrete postings."""

    pass


class MalformedCommand(LedgerBuilderError):
    """Raised for unparseable command lines."""

    pass


class IOFailure(LedgerBuilderError):
    """Raised when the ledger file cannot be read or written."""

    pass
