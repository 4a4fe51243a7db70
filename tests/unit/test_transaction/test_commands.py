#!/usr/bin/env python3
"""Tests for interactive command parsing."""

from decimal import Decimal

import pytest

from ledgerbuilder.core.errors import MalformedCommand
from ledgerbuilder.core.money import Money
from ledgerbuilder.transaction.commands import (
    AddOperation,
    DiscardOperation,
    FinalizeOperation,
    SplitOperation,
    TokenType,
    expected_token,
    parse_command,
    parse_header,
)


class TestParseHeader:
    """Test header line parsing."""

    def test_date_and_description(self):
        header = parse_header("  2020-01-10   Weekly groceries  ")
        assert header.date_text == "2020-01-10"
        assert header.description == "Weekly groceries"

    def test_date_only(self):
        assert parse_header("2020-01-10").description == ""

    def test_empty_line(self):
        with pytest.raises(MalformedCommand):
            parse_header("   ")


class TestParseCommand:
    """Test command parsing."""

    def test_add(self):
        op = parse_command("a Expenses:Food €5.00")
        assert op == AddOperation(account="Expenses:Food", money=Money.of("5.00", "€"))

    def test_split(self):
        op = parse_command("s Debts:Roomie Debts:Me €5.01")
        assert isinstance(op, SplitOperation)
        assert op.account_a == "Debts:Roomie"
        assert op.account_b == "Debts:Me"
        assert op.money.amount == Decimal("5.01")

    def test_finalize(self):
        assert parse_command("f Accounts:Checking") == FinalizeOperation(account="Accounts:Checking")

    def test_discard(self):
        assert parse_command("d") == DiscardOperation()

    @pytest.mark.parametrize(
        "line,currency,amount",
        [
            ("a Expenses:Food € 5.00", "€", "5.00"),
            ("a Expenses:Food 5.00 EUR", "EUR", "5.00"),
            ("a Expenses:Food CZK -120", "CZK", "-120"),
        ],
        ids=["prefix_token", "suffix_token", "negative"],
    )
    def test_two_token_amounts(self, line, currency, amount):
        op = parse_command(line)
        assert isinstance(op, AddOperation)
        assert op.money == Money.of(amount, currency)

    @pytest.mark.parametrize(
        "line",
        [
            "x Expenses:Food €5.00",  # unknown verb
            "a Expenses:Food",  # missing amount
            "a Expenses:Food €5.00 extra",  # too many tokens
            "a Expenses:Food 5.00",  # missing currency
            "a Expenses:Food €five",  # non-numeric
            "a Expenses:Food € $",  # two currencies, no number
            "a Expenses:Food 5 6",  # two numbers, no currency
            "a 123 €5.00",  # account must start with a letter
            "s Debts:Roomie €5.00",  # split needs two accounts
            "f",  # finalize needs an account
            "f Assets:A Assets:B",  # finalize takes one account
            "d now",  # discard takes nothing
        ],
    )
    def test_malformed(self, line):
        with pytest.raises(MalformedCommand):
            parse_command(line)


class TestExpectedToken:
    """Test the incremental grammar used for completion."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("", TokenType.VERB),
            ("a", TokenType.VERB),
            ("a ", TokenType.ACCOUNT),
            ("a Exp", TokenType.ACCOUNT),
            ("a Expenses:Food ", TokenType.AMOUNT),
            ("a Expenses:Food €", TokenType.AMOUNT),
            ("a Expenses:Food € ", TokenType.AMOUNT),
            ("a Expenses:Food €5 ", TokenType.END),
            ("s A ", TokenType.ACCOUNT),
            ("s A B ", TokenType.AMOUNT),
            ("f ", TokenType.ACCOUNT),
            ("f Assets:Cash ", TokenType.END),
            ("d ", TokenType.END),
            ("q ", None),
        ],
    )
    def test_expected_token(self, text, expected):
        assert expected_token(text) == expected
