#!/usr/bin/env python3
"""
Transaction Domain Models

Postings and completed transactions. Both are immutable once built; the
TransactionBuilder is the only thing that assembles them.
"""

from dataclasses import dataclass, field

from ..core.dates import LedgerDate
from ..core.errors import InvalidState, MalformedCommand
from ..core.money import Money


@dataclass(frozen=True)
class Posting:
    """
    One account line within a transaction.

    An amount of None is an open slot: ledger infers it as whatever balances
    the transaction.
    """

    account: str
    amount: Money | None = None

    def __post_init__(self) -> None:
        if not self.account or any(ch.isspace() for ch in self.account):
            raise MalformedCommand(f"Invalid account name: {self.account!r}")

    @property
    def is_open(self) -> bool:
        """True when this posting has no explicit amount."""
        return self.amount is None


@dataclass(frozen=True)
class TransactionHeader:
    """Date and description of a transaction."""

    date: LedgerDate
    description: str = ""

    def __str__(self) -> str:
        if self.description:
            return f"{self.date} {self.description}"
        return str(self.date)


@dataclass(frozen=True)
class Transaction:
    """
    A completed transaction.

    For every currency present, the posting amounts of that currency sum to
    zero (unless an open slot absorbs the remainder).
    """

    header: TransactionHeader
    postings: tuple[Posting, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        open_slots = sum(1 for p in self.postings if p.is_open)
        if open_slots > 1:
            raise InvalidState("At most one posting may omit its amount")

    @property
    def date(self) -> LedgerDate:
        return self.header.date

    @property
    def description(self) -> str:
        return self.header.description

    def balance(self) -> dict[str, Money]:
        """Sum of concrete posting amounts per currency, in first-seen order."""
        totals: dict[str, Money] = {}
        for posting in self.postings:
            if posting.amount is None:
                continue
            currency = posting.amount.currency
            if currency in totals:
                totals[currency] = totals[currency] + posting.amount
            else:
                totals[currency] = posting.amount
        return totals

    def has_open_slot(self) -> bool:
        return any(p.is_open for p in self.postings)

    def is_balanced(self) -> bool:
        """Check that every currency sums to exactly zero."""
        return all(total.is_zero() for total in self.balance().values())

    def currencies(self) -> list[str]:
        return list(self.balance())

    def accounts(self) -> list[str]:
        """Accounts in posting order, without duplicates."""
        return list(dict.fromkeys(p.account for p in self.postings))

    def merged(self) -> "Transaction":
        """
        Combine postings that share an account and currency.

        Postings keep the position of their first occurrence; combined amounts
        that cancel out to zero are dropped.
        If that would leave no posting with an amount, the postings are kept
        as entered.
        """
        combined: dict[tuple[str, str | None], Money | None] = {}
        for posting in self.postings:
            currency = posting.amount.currency if posting.amount is not None else None
            key = (posting.account, currency)
            if key in combined and posting.amount is not None:
                previous = combined[key]
                combined[key] = posting.amount if previous is None else previous + posting.amount
            else:
                combined[key] = posting.amount

        postings = tuple(
            Posting(account=account, amount=amount)
            for (account, _), amount in combined.items()
            if amount is None or not amount.is_zero()
        )
        if not any(p.amount is not None for p in postings):
            return self
        return Transaction(header=self.header, postings=postings)
