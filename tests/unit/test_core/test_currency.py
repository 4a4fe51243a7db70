#!/usr/bin/env python3
"""Tests for currency token utilities."""

from decimal import Decimal

import pytest

from ledgerbuilder.core.currency import (
    PREFIX,
    SUFFIX,
    AmountStyle,
    decimal_scale,
    format_amount,
    format_decimal,
    from_minor_units,
    split_amount_token,
    split_minor_units_in_half,
    to_minor_units,
)


class TestMinorUnits:
    """Test exact conversions between Decimal and integer minor units."""

    @pytest.mark.currency
    def test_decimal_scale(self):
        assert decimal_scale(Decimal("5.01")) == 2
        assert decimal_scale(Decimal("120")) == 0
        assert decimal_scale(Decimal("0.125")) == 3

    @pytest.mark.currency
    def test_to_and_from_minor_units(self):
        assert to_minor_units(Decimal("5.01"), 2) == 501
        assert to_minor_units(Decimal("5"), 2) == 500
        assert from_minor_units(250, 2) == Decimal("2.50")
        assert str(from_minor_units(-251, 2)) == "-2.51"

    @pytest.mark.currency
    def test_to_minor_units_refuses_truncation(self):
        with pytest.raises(ValueError):
            to_minor_units(Decimal("0.125"), 2)

    @pytest.mark.currency
    def test_split_in_half(self):
        assert split_minor_units_in_half(501) == (250, 251)
        assert split_minor_units_in_half(500) == (250, 250)
        assert split_minor_units_in_half(-501) == (-251, -250)
        assert split_minor_units_in_half(1) == (0, 1)

    @pytest.mark.currency
    def test_large_amounts_stay_exact(self):
        amount = Decimal("12345678901234567890123456789.01")
        units = to_minor_units(amount, 2)
        assert units == 1234567890123456789012345678901
        assert from_minor_units(-units, 2) == amount.copy_negate()


class TestSplitAmountToken:
    """Test amount token parsing."""

    @pytest.mark.currency
    def test_prefix_unspaced(self):
        parsed = split_amount_token("€5.00")
        assert parsed is not None
        assert parsed.currency == "€"
        assert parsed.amount == Decimal("5.00")
        assert parsed.style == AmountStyle(PREFIX, False, 2)

    @pytest.mark.currency
    def test_prefix_spaced_negative(self):
        parsed = split_amount_token("$ -1,000")
        assert parsed is not None
        assert parsed.currency == "$"
        assert parsed.amount == Decimal("-1000")
        assert parsed.style == AmountStyle(PREFIX, True, 0)

    @pytest.mark.currency
    def test_suffix(self):
        parsed = split_amount_token("-12.5 CZK")
        assert parsed is not None
        assert parsed.currency == "CZK"
        assert parsed.amount == Decimal("-12.5")
        assert parsed.style == AmountStyle(SUFFIX, True, 1)

    @pytest.mark.currency
    def test_bare_number(self):
        parsed = split_amount_token("42")
        assert parsed is not None
        assert parsed.currency == ""

    @pytest.mark.currency
    @pytest.mark.parametrize("text", ["", "€", "5,00", "--5", "-€-5", "€5EUR", "Expenses:Food", "- 5"])
    def test_rejects(self, text):
        assert split_amount_token(text) is None


class TestFormatting:
    """Test amount formatting."""

    @pytest.mark.currency
    def test_format_decimal(self):
        assert format_decimal(Decimal("5")) == "5.00"
        assert format_decimal(Decimal("-2.5")) == "-2.50"
        assert format_decimal(Decimal("0.125")) == "0.125"
        assert format_decimal(Decimal("120"), 0) == "120"

    @pytest.mark.currency
    def test_format_amount_sign_placement(self):
        assert format_amount(Decimal("-5"), "€") == "-€5.00"
        assert format_amount(Decimal("-5"), "EUR", AmountStyle(SUFFIX, True, 2)) == "-5.00 EUR"
        assert format_amount(Decimal("5"), "EUR", AmountStyle(PREFIX, True, 2)) == "EUR 5.00"
