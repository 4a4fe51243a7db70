#!/usr/bin/env python3
"""
Money Primitive Type

Immutable amount tagged with a currency symbol. Uses Decimal internally so
amounts are exact at whatever scale they were entered with, and refuses to
combine different currencies instead of converting.
"""

from dataclasses import dataclass
from decimal import Context, Decimal, Inexact, InvalidOperation, Overflow

from .currency import (
    DEFAULT_PRECISION,
    DEFAULT_STYLE,
    AmountStyle,
    decimal_scale,
    format_amount,
    from_minor_units,
    split_amount_token,
    split_minor_units_in_half,
    to_minor_units,
)
from .errors import CurrencyMismatch, MalformedCommand

# Halving works at no less than cent precision so "€5" splits into 2.50/2.50.
MINIMUM_SPLIT_SCALE = DEFAULT_PRECISION

# Longest amount accepted, counting integer and fractional digits
MAX_AMOUNT_DIGITS = 40

# Totals are computed here; anything that would round raises instead
_EXACT_CONTEXT = Context(prec=2 * MAX_AMOUNT_DIGITS, traps=[Inexact, InvalidOperation, Overflow])


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in a single currency.

    Supports both positive and negative amounts. Addition keeps the wider of
    the two scales, so per-currency totals stay exact.

    Examples:
        >>> food = Money.parse("€5.00")
        >>> str(food)
        '€5.00'

        >>> str(-food)
        '-€5.00'

        >>> first, second = Money.parse("€5.01").halve()
        >>> str(first), str(second)
        ('€2.50', '€2.51')

        >>> Money.parse("€5.00") + Money.parse("$5.00")
        Traceback (most recent call last):
        ...
        ledgerbuilder.core.errors.CurrencyMismatch: Cannot combine amounts in '€' and '$'
    """

    amount: Decimal
    currency: str

    @classmethod
    def of(cls, amount: Decimal | str | int, currency: str) -> "Money":
        """
        Create Money from a numeric value and a currency symbol.

        Args:
            amount: Decimal, integer, or plain numeric string like "5.01"
            currency: Currency symbol or code, e.g. "€" or "CZK"

        Raises:
            MalformedCommand: If the amount is not numeric or has more than
                MAX_AMOUNT_DIGITS digits
        """
        if isinstance(amount, Decimal):
            value = amount
        else:
            try:
                value = Decimal(str(amount).strip())
            except InvalidOperation as e:
                raise MalformedCommand(f"Amount is not numeric: {amount!r}") from e
        if not value.is_finite():
            raise MalformedCommand(f"Amount is not numeric: {amount!r}")
        if max(value.adjusted(), 0) + decimal_scale(value) + 1 > MAX_AMOUNT_DIGITS:
            raise MalformedCommand(f"Amount has more than {MAX_AMOUNT_DIGITS} digits: {amount!r}")
        return cls(amount=value, currency=currency)

    @classmethod
    def zero(cls, currency: str) -> "Money":
        """Create a zero amount in the given currency."""
        return cls(amount=Decimal(0), currency=currency)

    @classmethod
    def parse(cls, token: str) -> "Money":
        """
        Parse a token like '€5.00', '-€5.00', '5.00EUR' or '12 CZK'.

        Raises:
            MalformedCommand: If there is no currency symbol or the number is invalid
        """
        parsed = split_amount_token(token)
        if parsed is None:
            raise MalformedCommand(f"Invalid amount: {token!r}")
        if not parsed.currency:
            raise MalformedCommand(f"Amount is missing a currency: {token!r}")
        return cls.of(parsed.amount, parsed.currency)

    @property
    def scale(self) -> int:
        """Number of fractional digits carried by the amount."""
        return decimal_scale(self.amount)

    def is_zero(self) -> bool:
        """Check whether the amount is exactly zero."""
        return self.amount == 0

    def halve(self) -> tuple["Money", "Money"]:
        """
        Split into two shares that sum exactly to this amount.

        Works on integer minor units at max(scale, 2). The first share is the
        floor of the half, the second takes the remainder, so for an odd number
        of minor units the first share is the smaller one.

        Returns:
            (first_share, second_share)
        """
        scale = max(self.scale, MINIMUM_SPLIT_SCALE)
        first, second = split_minor_units_in_half(to_minor_units(self.amount, scale))
        return (
            Money(amount=from_minor_units(first, scale), currency=self.currency),
            Money(amount=from_minor_units(second, scale), currency=self.currency),
        )

    def format(self, style: AmountStyle = DEFAULT_STYLE) -> str:
        """Format with the currency symbol placed as the ledger file writes it."""
        return format_amount(self.amount, self.currency, style)

    def _check_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise CurrencyMismatch(self.currency, other.currency)

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects of the same currency."""
        self._check_currency(other)
        try:
            total = _EXACT_CONTEXT.add(self.amount, other.amount)
        except (Inexact, Overflow) as e:
            raise MalformedCommand(f"Amount out of range: {self} + {other}") from e
        return Money(amount=total, currency=self.currency)

    def __neg__(self) -> "Money":
        """Flip the sign, keeping the currency."""
        if self.amount == 0:
            return Money(amount=self.amount.copy_abs(), currency=self.currency)
        return Money(amount=self.amount.copy_negate(), currency=self.currency)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects of the same currency."""
        return self + (-other)

    def __str__(self) -> str:
        """Format with the default style."""
        return self.format()

    def __repr__(self) -> str:
        return f"Money(amount={self.amount!r}, currency={self.currency!r})"


def add(a: Money, b: Money) -> Money:
    """Add two amounts; raises CurrencyMismatch if currencies differ."""
    return a + b


def negate(a: Money) -> Money:
    """Return the amount with its sign flipped."""
    return -a


def halve(a: Money) -> tuple[Money, Money]:
    """Split an amount into (floor half, remainder)."""
    return a.halve()
