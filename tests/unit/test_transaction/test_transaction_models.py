#!/usr/bin/env python3
"""Tests for Posting and Transaction models."""

import pytest

from ledgerbuilder.core.dates import LedgerDate
from ledgerbuilder.core.errors import InvalidState, MalformedCommand
from ledgerbuilder.core.money import Money
from ledgerbuilder.transaction.models import Posting, Transaction, TransactionHeader


def make_transaction(*postings):
    header = TransactionHeader(date=LedgerDate.from_string("2020-01-10"), description="Shop")
    return Transaction(header=header, postings=tuple(postings))


class TestPosting:
    def test_open_slot(self):
        assert Posting("Assets:Cash").is_open
        assert not Posting("Assets:Cash", Money.parse("€1.00")).is_open

    @pytest.mark.parametrize("account", ["", "Expenses Food", "Expenses:Food\t"])
    def test_rejects_invalid_account(self, account):
        with pytest.raises(MalformedCommand):
            Posting(account)


class TestTransaction:
    def test_header_str(self):
        header = TransactionHeader(date=LedgerDate.from_string("2020-01-10"))
        assert str(header) == "2020-01-10"
        assert str(make_transaction().header) == "2020-01-10 Shop"

    def test_balance_per_currency(self):
        tx = make_transaction(
            Posting("Expenses:Food", Money.parse("€5.00")),
            Posting("Expenses:Food", Money.parse("120 CZK")),
            Posting("Assets:Cash", Money.parse("-€5.00")),
        )
        assert tx.currencies() == ["€", "CZK"]
        assert tx.balance()["€"].is_zero()
        assert not tx.is_balanced()

    def test_only_one_open_slot(self):
        with pytest.raises(InvalidState):
            make_transaction(Posting("Assets:Cash"), Posting("Assets:Checking"))

    def test_accounts_deduplicated_in_order(self):
        tx = make_transaction(
            Posting("Expenses:Food", Money.parse("€1.00")),
            Posting("Debts:Peter", Money.parse("€1.00")),
            Posting("Expenses:Food", Money.parse("€1.00")),
        )
        assert tx.accounts() == ["Expenses:Food", "Debts:Peter"]


class TestMerged:
    def test_combines_same_account_and_currency(self):
        tx = make_transaction(
            Posting("Expenses:Food", Money.parse("€2.50")),
            Posting("Debts:Peter", Money.parse("€2.51")),
            Posting("Expenses:Food", Money.parse("€4.00")),
            Posting("Expenses:Food", Money.parse("10 CZK")),
            Posting("Assets:Cash", Money.parse("-€9.01")),
            Posting("Assets:Cash", Money.parse("-10 CZK")),
        )
        merged = tx.merged()

        assert [(p.account, p.amount) for p in merged.postings] == [
            ("Expenses:Food", Money.of("6.50", "€")),
            ("Debts:Peter", Money.of("2.51", "€")),
            ("Expenses:Food", Money.of("10", "CZK")),
            ("Assets:Cash", Money.of("-9.01", "€")),
            ("Assets:Cash", Money.of("-10", "CZK")),
        ]
        assert merged.is_balanced()

    def test_cancelled_postings_are_dropped(self):
        tx = make_transaction(
            Posting("Expenses:Food", Money.parse("€5.00")),
            Posting("Expenses:Food", Money.parse("-€5.00")),
            Posting("Expenses:Rent", Money.parse("€1.00")),
            Posting("Assets:Cash", Money.parse("-€1.00")),
        )
        assert tx.merged().accounts() == ["Expenses:Rent", "Assets:Cash"]

    def test_everything_cancelling_keeps_postings(self):
        tx = make_transaction(
            Posting("Expenses:Food", Money.parse("€5.00")),
            Posting("Expenses:Food", Money.parse("-€5.00")),
        )
        merged = tx.merged()
        assert merged.postings == tx.postings
