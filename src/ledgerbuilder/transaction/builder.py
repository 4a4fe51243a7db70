#!/usr/bin/env python3
"""
Transaction Builder

Accumulates postings entered one command at a time and produces a balanced
Transaction.

State machine:
    AWAITING_HEADER --start_header--> ACCUMULATING --apply_finalize--> FINALIZED
    FINALIZED --reset--> AWAITING_HEADER
    ACCUMULATING --discard--> AWAITING_HEADER

Key Features:
- Per-currency running totals, created lazily on first sighting
- Split shorthand using floor-to-first-account halving
- Finalize appends one balancing posting per non-zero currency
- Every failed command leaves the state exactly as it was
"""

import logging
from enum import Enum

from ..core.dates import LedgerDate
from ..core.errors import EmptyTransaction, InvalidState, UnbalancedTransaction
from ..core.money import Money
from .commands import (
    AddOperation,
    DiscardOperation,
    FinalizeOperation,
    Operation,
    SplitOperation,
)
from .models import Posting, Transaction, TransactionHeader

logger = logging.getLogger(__name__)


class BuilderState(Enum):
    """Lifecycle of the transaction being built."""

    AWAITING_HEADER = "awaiting_header"
    ACCUMULATING = "accumulating"
    FINALIZED = "finalized"


class TransactionBuilder:
    """
    Builds one transaction at a time from interactive commands.

    Examples:
        >>> builder = TransactionBuilder()
        >>> builder.start_header("2020-01-10", "Groceries")
        >>> builder.apply_add("Expenses:Food", "€", "5.00")
        >>> tx = builder.apply_finalize("Accounts:Checking")
        >>> [(p.account, str(p.amount)) for p in tx.postings]
        [('Expenses:Food', '€5.00'), ('Accounts:Checking', '-€5.00')]
    """

    def __init__(self) -> None:
        self.state = BuilderState.AWAITING_HEADER
        self.header: TransactionHeader | None = None
        self.postings: list[Posting] = []
        self.running_totals: dict[str, Money] = {}
        self.transaction: Transaction | None = None

    def _require(self, state: BuilderState, action: str) -> None:
        if self.state != state:
            raise InvalidState(f"Cannot {action} while {self.state.value.replace('_', ' ')}")

    def _clear(self) -> None:
        self.state = BuilderState.AWAITING_HEADER
        self.header = None
        self.postings = []
        self.running_totals = {}
        self.transaction = None

    def start_header(self, date_text: str, description: str = "") -> None:
        """
        Begin a new transaction.

        Raises:
            InvalidState: If a transaction is already in progress
            InvalidDate: If the date cannot be parsed
        """
        self._require(BuilderState.AWAITING_HEADER, "start a transaction")
        date = LedgerDate.from_string(date_text)
        self.header = TransactionHeader(date=date, description=description.strip())
        self.state = BuilderState.ACCUMULATING
        logger.debug("Started transaction %s", self.header)

    def _accumulate(self, postings: list[Posting], money: Money) -> None:
        currency = money.currency
        total = self.running_totals.get(currency, Money.zero(currency)) + money
        self.postings.extend(postings)
        self.running_totals[currency] = total

    def apply_add(self, account: str, currency: str, amount) -> None:
        """
        Append a posting of `amount` in `currency` to `account`.

        Partial imbalance is expected here; nothing is checked until finalize.
        """
        self._require(BuilderState.ACCUMULATING, "add a posting")
        money = Money.of(amount, currency)
        self._accumulate([Posting(account=account, amount=money)], money)

    def apply_split(self, account_a: str, account_b: str, currency: str, amount) -> None:
        """
        Split `amount` in half between two accounts.

        `account_a` receives the floor half; `account_b` the remainder.
        """
        self._require(BuilderState.ACCUMULATING, "split an amount")
        money = Money.of(amount, currency)
        share_a, share_b = money.halve()
        self._accumulate(
            [Posting(account=account_a, amount=share_a), Posting(account=account_b, amount=share_b)],
            money,
        )

    def apply_finalize(self, account: str | None) -> Transaction:
        """
        Complete the transaction.

        Appends one posting per currency with a non-zero running total, with
        the negated total as amount. With `account=None` every total must
        already be zero.

        Raises:
            InvalidState: If no transaction is in progress
            EmptyTransaction: If no concrete posting was ever added (the
                transaction is dropped)
            UnbalancedTransaction: If `account` is None and a total is non-zero
        """
        self._require(BuilderState.ACCUMULATING, "finalize")

        if not any(p.amount is not None for p in self.postings):
            header = self.header
            self._clear()
            raise EmptyTransaction(f"Transaction '{header}' has no postings; discarded")

        outstanding = [total for total in self.running_totals.values() if not total.is_zero()]
        if account is None and outstanding:
            pending = ", ".join(str(total) for total in outstanding)
            raise UnbalancedTransaction(f"Transaction does not balance ({pending}); use f <account>")

        postings = list(self.postings)
        if account is not None:
            postings.extend(Posting(account=account, amount=-total) for total in outstanding)

        assert self.header is not None
        transaction = Transaction(header=self.header, postings=tuple(postings))
        self.postings = postings
        self.running_totals = {c: Money.zero(c) for c in self.running_totals}
        self.transaction = transaction
        self.state = BuilderState.FINALIZED
        logger.info("Finalized transaction %s with %d postings", transaction.header, len(postings))
        return transaction

    def apply(self, operation: Operation) -> Transaction | None:
        """Dispatch a parsed command; returns the Transaction on finalize."""
        if isinstance(operation, AddOperation):
            self.apply_add(operation.account, operation.money.currency, operation.money.amount)
        elif isinstance(operation, SplitOperation):
            self.apply_split(
                operation.account_a, operation.account_b, operation.money.currency, operation.money.amount
            )
        elif isinstance(operation, FinalizeOperation):
            return self.apply_finalize(operation.account)
        elif isinstance(operation, DiscardOperation):
            self.discard()
        return None

    def discard(self) -> None:
        """Drop the in-progress transaction."""
        self._require(BuilderState.ACCUMULATING, "discard")
        logger.info("Discarded transaction %s", self.header)
        self._clear()

    def reset(self) -> None:
        """Forget a finalized transaction (after it was saved or abandoned)."""
        self._require(BuilderState.FINALIZED, "reset")
        self._clear()

    def balance(self) -> list[Money]:
        """Current running totals in first-seen currency order."""
        return list(self.running_totals.values())
